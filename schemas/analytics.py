from pydantic import BaseModel
from typing import Dict, List, Optional, Union

from schemas.records import ResultRecord

Number = Union[int, float]


class GradeBucket(BaseModel):
    count: int
    percentage_of_total: int


class StudentAverage(BaseModel):
    student_id: str
    student_name: str
    average_percentage: int


class SubjectAverage(BaseModel):
    subject: str
    average_percentage: int
    sample_count: int


class PeriodAverage(BaseModel):
    academic_year: str
    semester: str
    average_percentage: int
    period: str  # Chart label, e.g. "2024-2025 - Sem 1"


class SubjectBreakdown(BaseModel):
    subject: str
    percentage: int
    grade: str
    semester: str
    academic_year: str


class ResultSummary(BaseModel):
    total_subjects: int
    total_marks_obtained: Number
    total_marks_possible: Number
    overall_percentage: float
    overall_grade: str


# --- API RESPONSES ---
class AnalyticsResponse(BaseModel):
    total_results: int
    grade_distribution: Dict[str, GradeBucket]
    student_performance: List[StudentAverage]
    student_breakdown: Optional[List[SubjectBreakdown]] = None
    subject_performance: List[SubjectAverage]
    progress: List[PeriodAverage]


class TeacherDashboardResponse(BaseModel):
    total_students: int
    total_results: int
    total_subjects: int
    recent_results: List[ResultRecord]
    grade_distribution: Dict[str, GradeBucket]
    subject_performance: List[SubjectAverage]


class StudentSummaryResponse(BaseModel):
    summary: ResultSummary
    academic_years: List[str]
    semesters: List[str]
    voice_over_enabled: bool
