"""Grade-point scale and credit-weighted GPA."""
from decimal import Decimal, ROUND_HALF_EVEN

# (lowest mark, grade point), checked top-down
GRADE_SCALE = (
    (Decimal(90), Decimal("4.0")),
    (Decimal(85), Decimal("3.7")),
    (Decimal(80), Decimal("3.3")),
    (Decimal(75), Decimal("3.0")),
    (Decimal(70), Decimal("2.7")),
    (Decimal(65), Decimal("2.3")),
    (Decimal(60), Decimal("2.0")),
    (Decimal(55), Decimal("1.7")),
    (Decimal(50), Decimal("1.0")),
)
ZERO = Decimal("0")
TWO_PLACES = Decimal("0.01")

def grade_point(mark):
    mark = Decimal(str(mark))
    for floor, point in GRADE_SCALE:
        if mark >= floor:
            return point
    return Decimal("0.0")

def graded(enrollments):
    """Enrollments that count towards the GPA: marked and attached to a course."""
    return [e for e in enrollments if e.mark is not None and e.course is not None]

def calculate_gpa(enrollments):
    rows = graded(enrollments)
    if not rows:
        return ZERO

    total_points = ZERO
    total_credits = 0
    for e in rows:
        credits = e.course.credits
        total_points += grade_point(e.mark) * credits
        total_credits += credits
    if total_credits <= 0:
        return ZERO
    return (total_points / total_credits).quantize(TWO_PLACES, rounding=ROUND_HALF_EVEN)

def total_credits(enrollments):
    return sum(e.course.credits for e in enrollments if e.course is not None)
