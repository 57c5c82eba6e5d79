"""
Aggregation Engine

Pure roll-ups over an already filtered sequence of results. Nothing here
reads or writes the record store and the input sequence is never mutated.

Per-result percentages are always recomputed from the raw marks; the stored
grade is only used for the grade distribution.
"""
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from schemas.analytics import (
    GradeBucket,
    PeriodAverage,
    ResultSummary,
    StudentAverage,
    SubjectAverage,
    SubjectBreakdown,
)
from schemas.records import ResultRecord
from services.grading import GRADE_LABELS, grade, percentage, round2, round_half_up

DISTINCT_FIELDS = ("subject", "academic_year", "semester", "student_id")


def _result_percentage(result: ResultRecord) -> float:
    return percentage(result.marks_obtained, result.total_marks)


def _semester_key(semester: str):
    # Numeric semesters first, in numeric order; anything else after them
    try:
        return (0, int(semester), "")
    except (TypeError, ValueError):
        return (1, 0, str(semester))


def _group_average(groups: "OrderedDict") -> Dict:
    return {key: round_half_up(sum(values) / len(values)) for key, values in groups.items()}


def grade_distribution(results: Sequence[ResultRecord]) -> Dict[str, GradeBucket]:
    counts = OrderedDict((label, 0) for label in GRADE_LABELS)
    for result in results:
        if result.grade in counts:
            counts[result.grade] += 1

    total = len(results)
    return OrderedDict(
        (
            label,
            GradeBucket(
                count=count,
                percentage_of_total=round_half_up(count / total * 100) if total else 0,
            ),
        )
        for label, count in counts.items()
    )


def per_student_average(results: Sequence[ResultRecord], top_n: Optional[int] = None) -> List[StudentAverage]:
    groups = OrderedDict()
    names = {}
    for result in results:
        groups.setdefault(result.student_id, []).append(_result_percentage(result))
        names.setdefault(result.student_id, result.student_name)

    averages = [
        StudentAverage(student_id=student_id, student_name=names[student_id], average_percentage=avg)
        for student_id, avg in _group_average(groups).items()
    ]
    # sorted() stable hai - barabar average pe first-seen order bana rehta hai
    averages = sorted(averages, key=lambda row: -row.average_percentage)
    if top_n is not None:
        averages = averages[:max(top_n, 0)]
    return averages


def per_subject_average(results: Sequence[ResultRecord], sort: bool = False) -> List[SubjectAverage]:
    groups = OrderedDict()
    for result in results:
        groups.setdefault(result.subject, []).append(_result_percentage(result))

    averages = [
        SubjectAverage(subject=subject, average_percentage=round_half_up(sum(values) / len(values)), sample_count=len(values))
        for subject, values in groups.items()
    ]
    if sort:
        averages = sorted(averages, key=lambda row: -row.average_percentage)
    return averages


def time_series_progress(results: Sequence[ResultRecord]) -> List[PeriodAverage]:
    groups = OrderedDict()
    for result in results:
        groups.setdefault((result.academic_year, result.semester), []).append(_result_percentage(result))

    progress = [
        PeriodAverage(
            academic_year=year,
            semester=semester,
            average_percentage=avg,
            period=f"{year} - Sem {semester}",
        )
        for (year, semester), avg in _group_average(groups).items()
    ]
    return sorted(progress, key=lambda row: (row.academic_year, _semester_key(row.semester)))


def student_subject_breakdown(results: Sequence[ResultRecord]) -> List[SubjectBreakdown]:
    """Per-result rows for the single-student analytics view, ordered by semester."""
    rows = [
        SubjectBreakdown(
            subject=result.subject,
            percentage=round_half_up(_result_percentage(result)),
            grade=result.grade,
            semester=result.semester,
            academic_year=result.academic_year,
        )
        for result in results
    ]
    return sorted(rows, key=lambda row: _semester_key(row.semester))


def result_summary(results: Sequence[ResultRecord]) -> ResultSummary:
    obtained = sum(result.marks_obtained for result in results)
    possible = sum(result.total_marks for result in results)
    overall = round2(percentage(obtained, possible))
    return ResultSummary(
        total_subjects=len(results),
        total_marks_obtained=obtained,
        total_marks_possible=possible,
        overall_percentage=overall,
        overall_grade=grade(overall),
    )


def distinct_values(results: Sequence[ResultRecord], field: str) -> List[str]:
    if field not in DISTINCT_FIELDS:
        raise ValueError(f"Unsupported field: {field}")
    seen = OrderedDict()
    for result in results:
        seen.setdefault(getattr(result, field), None)
    return list(seen)
