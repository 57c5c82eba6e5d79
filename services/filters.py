"""Composable result filters: every predicate is optional and AND-combined."""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from schemas.records import ResultRecord

ALL_SENTINELS = {"", "all", "all_years", "all_semesters", "all_subjects", "all_students"}


def is_all(value) -> bool:
    return value is None or str(value).strip().lower() in ALL_SENTINELS


@dataclass
class ResultFilter:
    student_id: Optional[str] = None
    subject: Optional[str] = None
    academic_year: Optional[str] = None
    semester: Optional[str] = None
    search: Optional[str] = None

    def matches(self, result: ResultRecord) -> bool:
        if not is_all(self.student_id) and result.student_id != self.student_id:
            return False
        if not is_all(self.subject) and result.subject != self.subject:
            return False
        if not is_all(self.academic_year) and result.academic_year != self.academic_year:
            return False
        if not is_all(self.semester) and result.semester != self.semester:
            return False
        if self.search and self.search.strip():
            term = self.search.strip().lower()
            haystack = (result.subject, result.academic_year, result.semester, result.student_name)
            if not any(term in value.lower() for value in haystack):
                return False
        return True

    def apply(self, results: Iterable[ResultRecord]) -> List[ResultRecord]:
        return [result for result in results if self.matches(result)]
