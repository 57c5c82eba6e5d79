"""
Result Repository

CRUD over the ``results`` collection. The grade is computed here at write
time and stored next to the marks; every edit of the marks recomputes it.
"""
import logging
import math
import re
from typing import List, Optional

from schemas.records import ResultRecord
from services import record_store
from services.errors import NotFoundError, ValidationError
from services.grading import grade_for_marks
from services.user_repository import UserRepository

logger = logging.getLogger(__name__)

ACADEMIC_YEAR_PATTERN = re.compile(r"^\d{4}-\d{4}$")
SEMESTERS = tuple(str(n) for n in range(1, 9))


def _require_text(value, field_label):
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_label} is required")
    return str(value).strip()


def _coerce_marks(value, field_label):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_label} is required")
    if isinstance(value, bool):
        raise ValidationError(f"Valid {field_label.lower()} are required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Valid {field_label.lower()} are required")
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"Valid {field_label.lower()} are required")
    # 80.0 ko 80 hi store karte hain
    return int(number) if number.is_integer() else number


def validate_marks(marks_obtained, total_marks):
    """Return the coerced ``(marks_obtained, total_marks)`` pair or raise."""
    marks = _coerce_marks(marks_obtained, "Marks obtained")
    total = _coerce_marks(total_marks, "Total marks")
    if total <= 0:
        raise ValidationError("Total marks must be greater than 0")
    if marks < 0 or marks > total:
        raise ValidationError(f"Marks must be between 0 and {total}")
    return marks, total


def _validate_period(academic_year, semester):
    year = _require_text(academic_year, "Academic year")
    if not ACADEMIC_YEAR_PATTERN.match(year):
        raise ValidationError("Academic year must look like 2024-2025")
    sem = _require_text(semester, "Semester")
    if sem not in SEMESTERS:
        raise ValidationError("Semester must be a number from 1 to 8")
    return year, sem


class ResultRepository:
    def __init__(self, store: record_store.RecordStore, users: Optional[UserRepository] = None):
        self.store = store
        self.users = users or UserRepository(store)

    def _load(self) -> List[dict]:
        return self.store.read(record_store.RESULTS)

    def list_results(self) -> List[ResultRecord]:
        return [ResultRecord(**row) for row in self._load()]

    def list_by_student(self, student_id: str) -> List[ResultRecord]:
        return [ResultRecord(**row) for row in self._load() if row.get("student_id") == student_id]

    def recent_results(self, limit: int = 5, student_id: Optional[str] = None) -> List[ResultRecord]:
        if limit <= 0:
            return []
        rows = self._load()
        if student_id is not None:
            rows = [row for row in rows if row.get("student_id") == student_id]
        rows = rows[-limit:]
        return [ResultRecord(**row) for row in reversed(rows)]

    def get_result(self, result_id: str) -> ResultRecord:
        for row in self._load():
            if row.get("id") == result_id:
                return ResultRecord(**row)
        raise NotFoundError("Result not found")

    def add_result(self, student_id, subject, marks_obtained, total_marks, academic_year, semester) -> ResultRecord:
        try:
            student_id = _require_text(student_id, "Student")
            subject = _require_text(subject, "Subject")
            marks, total = validate_marks(marks_obtained, total_marks)
            academic_year, semester = _validate_period(academic_year, semester)
        except ValidationError as e:
            logger.warning("Rejected new result: %s", e.message)
            raise

        student = self.users.get_student(student_id)

        rows = self._load()
        result = ResultRecord(
            id=record_store.new_record_id("result", (row.get("id") for row in rows)),
            student_id=student.id,
            student_name=student.name,
            subject=subject,
            marks_obtained=marks,
            total_marks=total,
            academic_year=academic_year,
            semester=semester,
            grade=grade_for_marks(marks, total),
        )
        rows.append(result.model_dump())
        self.store.write(record_store.RESULTS, rows)

        logger.info("Added %s result %s for %s (%s)", subject, result.id, student.name, result.grade)
        return result

    def update_result(
        self,
        result_id,
        subject=None,
        academic_year=None,
        semester=None,
        marks_obtained=None,
        total_marks=None,
    ) -> ResultRecord:
        rows = self._load()
        index = next((i for i, row in enumerate(rows) if row.get("id") == result_id), None)
        if index is None:
            raise NotFoundError("Result not found")

        existing = rows[index]
        merged = {
            "subject": existing["subject"] if subject is None else subject,
            "academic_year": existing["academic_year"] if academic_year is None else academic_year,
            "semester": existing["semester"] if semester is None else semester,
            "marks_obtained": existing["marks_obtained"] if marks_obtained is None else marks_obtained,
            "total_marks": existing["total_marks"] if total_marks is None else total_marks,
        }

        try:
            new_subject = _require_text(merged["subject"], "Subject")
            new_year, new_semester = _validate_period(merged["academic_year"], merged["semester"])
            marks, total = validate_marks(merged["marks_obtained"], merged["total_marks"])
        except ValidationError as e:
            logger.warning("Rejected update of result %s: %s", result_id, e.message)
            raise

        updated = ResultRecord(
            **{
                **existing,
                "subject": new_subject,
                "academic_year": new_year,
                "semester": new_semester,
                "marks_obtained": marks,
                "total_marks": total,
                "grade": grade_for_marks(marks, total),
            }
        )
        rows[index] = updated.model_dump()
        self.store.write(record_store.RESULTS, rows)

        logger.info("Updated result %s (%s)", result_id, updated.grade)
        return updated

    def delete_result(self, result_id) -> None:
        rows = self._load()
        remaining = [row for row in rows if row.get("id") != result_id]
        if len(remaining) == len(rows):
            # Pehle se delete hai - kuch nahi karna
            return
        self.store.write(record_store.RESULTS, remaining)
        logger.info("Deleted result %s", result_id)
