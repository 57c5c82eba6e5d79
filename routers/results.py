from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from routers.deps import get_result_repository, get_user_repository, require_teacher
from schemas.records import ResultRecord
from schemas.results import (
    GradePreviewResponse,
    ResultCreateSchema,
    ResultOptionsResponse,
    ResultUpdateSchema,
)
from services.aggregation import distinct_values
from services.errors import ValidationError
from services.filters import ResultFilter
from services.grading import grade, percentage, round2
from services.result_repository import ResultRepository, validate_marks
from services.user_repository import UserRepository

router = APIRouter(prefix="/results", tags=["Results"], dependencies=[Depends(require_teacher)])


def recent_academic_years(count: int = 5, today: Optional[date] = None) -> List[str]:
    current_year = (today or date.today()).year
    return [f"{current_year - i}-{current_year - i + 1}" for i in range(count)]


# ===============================
#   1. SPECIFIC ROUTES (UPAR RAKHEIN)
# ===============================

# Save karne se pehle grade dikhane ke liye
@router.get("/grade-preview", response_model=GradePreviewResponse)
def preview_grade(marks_obtained: float, total_marks: float = 100):
    marks, total = validate_marks(marks_obtained, total_marks)
    pct = round2(percentage(marks, total))
    return {"percentage": pct, "grade": grade(pct)}


# Filters aur subject auto-suggest ke options
@router.get("/options", response_model=ResultOptionsResponse)
def result_options(results: ResultRepository = Depends(get_result_repository)):
    all_results = results.list_results()
    return {
        "subjects": distinct_values(all_results, "subject"),
        "academic_years": distinct_values(all_results, "academic_year"),
        "semesters": distinct_values(all_results, "semester"),
        "recent_academic_years": recent_academic_years(),
    }


# ===============================
#   2. LIST + ADD
# ===============================

@router.get("", response_model=List[ResultRecord])
def list_results(
    student_id: Optional[str] = None,
    subject: Optional[str] = None,
    academic_year: Optional[str] = None,
    semester: Optional[str] = None,
    search: Optional[str] = None,
    results: ResultRepository = Depends(get_result_repository),
):
    criteria = ResultFilter(
        student_id=student_id,
        subject=subject,
        academic_year=academic_year,
        semester=semester,
        search=search,
    )
    return criteria.apply(results.list_results())


@router.post("", response_model=ResultRecord, status_code=status.HTTP_201_CREATED)
def add_result(
    payload: ResultCreateSchema,
    results: ResultRepository = Depends(get_result_repository),
    users: UserRepository = Depends(get_user_repository),
):
    student_id = payload.student_id
    if not student_id:
        if not payload.roll_number:
            raise ValidationError("Please search for a valid student first")
        student_id = users.find_student_by_roll_number(payload.roll_number).id

    return results.add_result(
        student_id=student_id,
        subject=payload.subject,
        marks_obtained=payload.marks_obtained,
        total_marks=payload.total_marks,
        academic_year=payload.academic_year,
        semester=payload.semester,
    )


# ===============================
#   3. SINGLE RESULT (EDIT / DELETE)
# ===============================

@router.get("/{result_id}", response_model=ResultRecord)
def get_result(result_id: str, results: ResultRepository = Depends(get_result_repository)):
    return results.get_result(result_id)


@router.put("/{result_id}", response_model=ResultRecord)
def update_result(
    result_id: str,
    payload: ResultUpdateSchema,
    results: ResultRepository = Depends(get_result_repository),
):
    return results.update_result(result_id, **payload.model_dump())


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_result(result_id: str, results: ResultRepository = Depends(get_result_repository)):
    results.delete_result(result_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
