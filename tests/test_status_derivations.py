from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from hagwon.app.services.billing import calculate_total, days_overdue, derive_invoice_status
from hagwon.app.services.classes import derive_class_status

TODAY = date(2024, 3, 15)


@pytest.mark.parametrize(
    "current, capacity, expected",
    [
        (10, 10, "full"),
        (12, 10, "full"),
        (9, 10, "near_full"),
        (5, 10, "normal"),
        (4, 10, "under_enrolled"),
        (0, 10, "under_enrolled"),
    ],
)
def test_derive_class_status(current, capacity, expected):
    assert derive_class_status(current, capacity) == expected


def test_derive_class_status_rejects_zero_capacity():
    with pytest.raises(ValueError):
        derive_class_status(0, 0)


@pytest.mark.parametrize(
    "paid, due, expected",
    [
        ("300", date(2024, 3, 10), "paid"),
        ("0", date(2024, 3, 10), "overdue"),
        ("100", date(2024, 3, 10), "overdue"),
        ("100", date(2024, 3, 20), "partially_paid"),
        ("0", date(2024, 3, 15), "unpaid"),
    ],
)
def test_derive_invoice_status(paid, due, expected):
    assert derive_invoice_status(Decimal("300"), Decimal(paid), due, today=TODAY) == expected


def test_days_overdue():
    unpaid = SimpleNamespace(total_amount=Decimal("300"), paid_amount=Decimal("0"), due_date=date(2024, 3, 10))
    assert days_overdue(unpaid, TODAY) == 5
    assert days_overdue(unpaid, date(2024, 3, 1)) == 0

    paid = SimpleNamespace(total_amount=Decimal("300"), paid_amount=Decimal("300"), due_date=date(2024, 3, 10))
    assert days_overdue(paid, TODAY) == 0


def test_calculate_total_subtracts_discounts_and_floors_at_zero():
    def item(amount, item_type):
        return SimpleNamespace(amount=Decimal(amount), item_type=item_type)

    assert calculate_total([item("300000", "tuition"), item("50000", "discount")]) == Decimal("250000.00")
    assert calculate_total([item("1000", "extra"), item("5000", "discount")]) == Decimal("0.00")
