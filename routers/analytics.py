from typing import Optional

from fastapi import APIRouter, Depends

from config import TOP_STUDENTS_LIMIT
from routers.deps import get_result_repository, require_teacher
from schemas.analytics import AnalyticsResponse
from services import aggregation
from services.filters import ResultFilter, is_all
from services.result_repository import ResultRepository

router = APIRouter(prefix="/analytics", tags=["Analytics"], dependencies=[Depends(require_teacher)])


@router.get("", response_model=AnalyticsResponse)
def performance_analytics(
    student_id: Optional[str] = None,
    subject: Optional[str] = None,
    academic_year: Optional[str] = None,
    results: ResultRepository = Depends(get_result_repository),
):
    """
    Grade distribution, student/subject performance aur year-semester progress.
    Ek student select ho to uska subject-wise breakdown bhi milta hai.
    """
    filtered = ResultFilter(student_id=student_id, subject=subject, academic_year=academic_year).apply(
        results.list_results()
    )

    breakdown = None
    if not is_all(student_id):
        breakdown = aggregation.student_subject_breakdown(filtered)

    return {
        "total_results": len(filtered),
        "grade_distribution": aggregation.grade_distribution(filtered),
        "student_performance": aggregation.per_student_average(filtered, top_n=TOP_STUDENTS_LIMIT),
        "student_breakdown": breakdown,
        "subject_performance": aggregation.per_subject_average(filtered),
        "progress": aggregation.time_series_progress(filtered),
    }
