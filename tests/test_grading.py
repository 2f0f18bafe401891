from decimal import Decimal
from types import SimpleNamespace

import pytest

from university.grading import calculate_gpa, grade_point, graded, total_credits


def enrollment(mark, credits=3, with_course=True):
    course = SimpleNamespace(credits=credits) if with_course else None
    return SimpleNamespace(mark=None if mark is None else Decimal(str(mark)), course=course)


@pytest.mark.parametrize("mark,point", [
    (100, "4.0"), (90, "4.0"), (89.99, "3.7"), (85, "3.7"), (80, "3.3"),
    (75, "3.0"), (70, "2.7"), (65, "2.3"), (60, "2.0"), (55, "1.7"),
    (50, "1.0"), (49.99, "0.0"), (0, "0.0"),
])
def test_grade_point_scale(mark, point):
    assert grade_point(mark) == Decimal(point)


def test_gpa_without_enrollments_is_zero():
    assert calculate_gpa([]) == 0


def test_gpa_ignores_ungraded_and_courseless_rows():
    rows = [enrollment(None), enrollment(95, with_course=False)]
    assert calculate_gpa(rows) == 0
    assert graded(rows) == []


@pytest.mark.parametrize("credits", [1, 3, 6])
def test_perfect_mark_gives_four(credits):
    assert calculate_gpa([enrollment(100, credits)]) == Decimal("4.00")


def test_gpa_is_credit_weighted():
    # (4.0*3 + 1.0*3) / 6
    assert calculate_gpa([enrollment(90, 3), enrollment(50, 3)]) == Decimal("2.50")
    # (3.7*4 + 2.7*3) / 7 = 3.2714...
    assert calculate_gpa([enrollment(85, 4), enrollment(70, 3)]) == Decimal("3.27")


def test_gpa_rounds_to_two_places():
    gpa = calculate_gpa([enrollment(80, 1), enrollment(60, 2)])
    # (3.3 + 4.0) / 3 = 2.4333...
    assert gpa == Decimal("2.43")
    assert gpa.as_tuple().exponent == -2


def test_total_credits_skips_missing_courses():
    rows = [enrollment(70, 4), enrollment(None, 2), enrollment(90, with_course=False)]
    assert total_credits(rows) == 6
    assert total_credits(graded(rows)) == 4
