from fastapi import APIRouter, Depends

from config import RECENT_RESULTS_LIMIT
from routers.deps import get_result_repository, get_user_repository, require_teacher
from schemas.analytics import TeacherDashboardResponse
from services.aggregation import distinct_values, grade_distribution, per_subject_average
from services.result_repository import ResultRepository
from services.user_repository import UserRepository

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=TeacherDashboardResponse)
def dashboard_view(
    teacher=Depends(require_teacher),
    results: ResultRepository = Depends(get_result_repository),
    users: UserRepository = Depends(get_user_repository),
):
    all_results = results.list_results()

    # 1. Basic Counts
    total_students = len(users.list_students())
    total_subjects = len(distinct_values(all_results, "subject"))

    # 2. Recent entries (latest pehle)
    recent = results.recent_results(RECENT_RESULTS_LIMIT)

    return {
        "total_students": total_students,
        "total_results": len(all_results),
        "total_subjects": total_subjects,
        "recent_results": recent,
        "grade_distribution": grade_distribution(all_results),
        "subject_performance": per_subject_average(all_results),
    }
