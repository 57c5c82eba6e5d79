import math

GRADE_LABELS = ("A+", "A", "B", "C", "D", "F")

# (inclusive lower bound, label) - highest pehle check hota hai
GRADE_THRESHOLDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)


def grade(percentage):
    if percentage is None or math.isnan(percentage):
        percentage = 0
    for lower_bound, label in GRADE_THRESHOLDS:
        if percentage >= lower_bound:
            return label
    return "F"


def percentage(obtained, total):
    """Raw percentage; a zero total gives 0 instead of dividing by zero."""
    if not total:
        return 0
    return obtained / total * 100


def round2(value):
    return round(value, 2)


def round_half_up(value):
    return int(math.floor(value + 0.5))


def grade_for_marks(marks_obtained, total_marks):
    return grade(round2(percentage(marks_obtained, total_marks)))


def format_number(value):
    """80.0 -> "80", 72.5 -> "72.5" (for narration and report cells)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
