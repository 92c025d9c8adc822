"""Immutable value objects shared by the student and dashboard entities."""

import math
from typing import Literal

AttendanceLevel = Literal["good", "warning", "poor"]
SchoolLevel = Literal["elementary", "middle", "high"]


class AttendanceRate:
    """Attendance percentage guaranteed to be within 0-100."""

    __slots__ = ("_value",)

    def __init__(self, value: float):
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError(f"Attendance rate must be a finite number, got: {value}")
        if value < 0 or value > 100:
            raise ValueError(f"Attendance rate must be between 0 and 100, got: {value}")
        self._value = float(value)

    @classmethod
    def from_percentage_string(cls, percentage: str) -> "AttendanceRate":
        try:
            value = float(percentage.replace("%", "").strip())
        except ValueError as exc:
            raise ValueError(f"Attendance rate must be a finite number, got: {percentage}") from exc
        return cls(value)

    @property
    def value(self) -> float:
        return self._value

    def to_percentage_string(self) -> str:
        return f"{self._value:g}%"

    def is_good(self) -> bool:
        return self._value >= 90

    def is_warning(self) -> bool:
        return 70 <= self._value < 90

    def is_poor(self) -> bool:
        return self._value < 70

    def status(self) -> AttendanceLevel:
        if self.is_good():
            return "good"
        if self.is_warning():
            return "warning"
        return "poor"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AttendanceRate) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"AttendanceRate({self._value:g})"


VALID_GRADES = (
    "초1", "초2", "초3", "초4", "초5", "초6",
    "중1", "중2", "중3",
    "고1", "고2", "고3",
)


class StudentGrade:
    __slots__ = ("_value",)

    def __init__(self, value: str):
        if value not in VALID_GRADES:
            raise ValueError(f"Invalid grade: {value}. Must be one of {', '.join(VALID_GRADES)}")
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def is_elementary_school(self) -> bool:
        return self._value.startswith("초")

    def is_middle_school(self) -> bool:
        return self._value.startswith("중")

    def is_high_school(self) -> bool:
        return self._value.startswith("고")

    def school_level(self) -> SchoolLevel:
        if self.is_elementary_school():
            return "elementary"
        if self.is_middle_school():
            return "middle"
        return "high"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StudentGrade) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"StudentGrade({self._value!r})"


# Codes accepted by the HTTP layer, mapped to the display grades above.
GRADE_CODES = {
    "elem1": "초1", "elem2": "초2", "elem3": "초3", "elem4": "초4", "elem5": "초5", "elem6": "초6",
    "middle1": "중1", "middle2": "중2", "middle3": "중3",
    "high1": "고1", "high2": "고2", "high3": "고3",
}


def parse_grade(value: str | None) -> StudentGrade | None:
    """Lenient lookup used when reading stored rows; unknown grades map to None."""
    if not value:
        return None
    grade = GRADE_CODES.get(value, value)
    if grade not in VALID_GRADES:
        return None
    return StudentGrade(grade)


def grade_aliases(value: str) -> set[str]:
    """Every stored spelling of the grade `value` names, e.g. "중2" and "middle2"."""
    grade = GRADE_CODES.get(value, value)
    return {value, grade} | {code for code, display in GRADE_CODES.items() if display == grade}
