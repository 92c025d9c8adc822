import pytest

from hagwon.app.core.errors import ValidationError
from hagwon.app.core.pagination import PageMeta, Paginator, ServerPaginator


def test_paginator_pages_cover_every_item_in_order():
    items = list(range(23))
    paginator = Paginator(items, items_per_page=5)
    assert paginator.total_pages == 5

    collected = []
    for page in range(1, paginator.total_pages + 1):
        paginator.go_to_page(page)
        collected.extend(paginator.page_items)
    assert collected == items


def test_paginator_clamps_navigation():
    paginator = Paginator(list(range(25)), items_per_page=10)
    assert paginator.go_to_page(99) == 3
    assert paginator.go_to_page(-4) == 1
    assert paginator.previous_page() == 1
    paginator.go_to_page(3)
    assert paginator.next_page() == 3
    assert not paginator.has_next_page
    assert paginator.has_previous_page


def test_paginator_display_indices():
    paginator = Paginator(list(range(25)), items_per_page=10, initial_page=3)
    assert paginator.start_index == 21
    assert paginator.end_index == 25
    assert paginator.page_items == [20, 21, 22, 23, 24]
    assert paginator.reset_page() == 1
    assert paginator.page_items == list(range(10))


def test_paginator_empty_sequence_stays_on_first_page():
    paginator = Paginator([], items_per_page=10)
    assert paginator.total_pages == 0
    assert paginator.current_page == 1
    assert paginator.go_to_page(5) == 1
    assert paginator.next_page() == 1
    assert paginator.page_items == []
    assert not paginator.has_next_page
    assert not paginator.has_previous_page


def test_paginator_rejects_non_positive_page_size():
    with pytest.raises(ValidationError):
        Paginator([1, 2, 3], items_per_page=0)
    with pytest.raises(ValidationError):
        ServerPaginator(10, items_per_page=-1)


def test_server_paginator_ranges():
    paginator = ServerPaginator(45, items_per_page=10)
    for page in range(1, paginator.total_pages):
        paginator.go_to_page(page)
        assert paginator.range_from == (page - 1) * 10
        assert paginator.range_to - paginator.range_from + 1 == 10

    paginator.go_to_page(5)
    assert paginator.range_from == 40
    assert paginator.start_index == 41
    assert paginator.end_index == 45


def test_server_paginator_clamps_initial_page():
    paginator = ServerPaginator(15, items_per_page=10, initial_page=7)
    assert paginator.current_page == 2
    assert ServerPaginator(0, items_per_page=10, initial_page=3).current_page == 1


def test_page_meta_flags():
    meta = PageMeta.build(page=2, limit=10, total=25)
    assert meta.totalPages == 3
    assert meta.hasNext is True
    assert meta.hasPrev is True

    last = PageMeta.build(page=3, limit=10, total=25)
    assert last.hasNext is False

    empty = PageMeta.build(page=1, limit=10, total=0)
    assert empty.totalPages == 0
    assert empty.hasNext is False
    assert empty.hasPrev is False
