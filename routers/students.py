import unicodedata
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from config import RECENT_RESULTS_LIMIT, SPEECH_PITCH, SPEECH_RATE
from routers.auth import to_public
from routers.deps import (
    get_result_repository,
    get_user_repository,
    require_student,
    require_teacher,
)
from schemas.analytics import StudentSummaryResponse
from schemas.records import ResultRecord, StudentRecord, UserPublic
from schemas.results import NarrationResponse
from schemas.users import VoiceOverSchema
from services.aggregation import distinct_values, result_summary
from services.errors import NotFoundError, PermissionDeniedError
from services.filters import ResultFilter
from services.narration import build_narration_script, estimate_duration
from services.report import build_report, render_report_pdf
from services.result_repository import ResultRepository
from services.user_repository import UserRepository

router = APIRouter(prefix="/students", tags=["Students"])


def _my_results(
    student: StudentRecord,
    results: ResultRepository,
    year: Optional[str],
    semester: Optional[str],
    subject: Optional[str],
    search: Optional[str] = None,
) -> List[ResultRecord]:
    criteria = ResultFilter(academic_year=year, semester=semester, subject=subject, search=search)
    return criteria.apply(results.list_by_student(student.id))


def _attachment_header(filename: str) -> str:
    # filename= sirf ASCII, asli naam filename* mein (RFC 6266)
    fallback = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace("\\", "").replace("\"", "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


# ===============================
#   1. TEACHER: STUDENT LOOKUP
# ===============================

@router.get("", response_model=List[UserPublic], dependencies=[Depends(require_teacher)])
def list_students(users: UserRepository = Depends(get_user_repository)):
    return [to_public(student) for student in users.list_students()]


# Result add karne se pehle roll number se student dhoondhna
@router.get("/lookup", response_model=UserPublic, dependencies=[Depends(require_teacher)])
def lookup_student(roll_number: str, users: UserRepository = Depends(get_user_repository)):
    return to_public(users.find_student_by_roll_number(roll_number))


# ===============================
#   2. STUDENT PORTAL (/me)
# ===============================

@router.get("/me/results", response_model=List[ResultRecord])
def my_results(
    year: Optional[str] = None,
    semester: Optional[str] = None,
    subject: Optional[str] = None,
    search: Optional[str] = None,
    student: StudentRecord = Depends(require_student),
    results: ResultRepository = Depends(get_result_repository),
):
    return _my_results(student, results, year, semester, subject, search)


@router.get("/me/summary", response_model=StudentSummaryResponse)
def my_summary(
    year: Optional[str] = None,
    semester: Optional[str] = None,
    student: StudentRecord = Depends(require_student),
    results: ResultRepository = Depends(get_result_repository),
):
    all_mine = results.list_by_student(student.id)
    filtered = ResultFilter(academic_year=year, semester=semester).apply(all_mine)
    return {
        "summary": result_summary(filtered),
        "academic_years": distinct_values(all_mine, "academic_year"),
        "semesters": distinct_values(all_mine, "semester"),
        "voice_over_enabled": student.voice_over_enabled,
    }


@router.get("/me/recent", response_model=List[ResultRecord])
def my_recent_results(
    student: StudentRecord = Depends(require_student),
    results: ResultRepository = Depends(get_result_repository),
):
    return results.recent_results(RECENT_RESULTS_LIMIT, student_id=student.id)


# PDF download
@router.get("/me/report")
def download_report(
    year: Optional[str] = None,
    semester: Optional[str] = None,
    subject: Optional[str] = None,
    search: Optional[str] = None,
    student: StudentRecord = Depends(require_student),
    results: ResultRepository = Depends(get_result_repository),
):
    filtered = _my_results(student, results, year, semester, subject, search)
    if not filtered:
        raise NotFoundError("No results to download with the current filters")

    rendered = render_report_pdf(build_report(filtered, student.name, student.roll_number))
    return Response(
        content=rendered.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": _attachment_header(rendered.filename),
            "X-Page-Count": str(rendered.page_count),
        },
    )


# Voice-over script (browser speechSynthesis isko bolta hai)
@router.get("/me/narration", response_model=NarrationResponse)
def narration(
    year: Optional[str] = None,
    semester: Optional[str] = None,
    subject: Optional[str] = None,
    search: Optional[str] = None,
    student: StudentRecord = Depends(require_student),
    results: ResultRepository = Depends(get_result_repository),
):
    if not student.voice_over_enabled:
        raise PermissionDeniedError("Voice-over is disabled. Enable it from your dashboard first")

    filtered = _my_results(student, results, year, semester, subject, search)
    if not filtered:
        raise NotFoundError("No results to read with the current filters")

    text = build_narration_script(
        filtered, student.name, student.roll_number, year=year, semester=semester, subject=subject
    )
    duration = estimate_duration(text)
    return {
        "text": text,
        "rate": SPEECH_RATE,
        "pitch": SPEECH_PITCH,
        "estimated_duration_ms": int(round(duration * 1000)),
    }


@router.post("/me/voice-over", response_model=UserPublic)
def toggle_voice_over(
    payload: Optional[VoiceOverSchema] = None,
    student: StudentRecord = Depends(require_student),
    users: UserRepository = Depends(get_user_repository),
):
    enabled = payload.enabled if payload else None
    return to_public(users.set_voice_over(student.id, enabled))
