from pydantic import BaseModel
from typing import List, Optional, Union

Number = Union[int, float]


# 1. Teacher naya result add karta hai (student_id ya roll_number se)
class ResultCreateSchema(BaseModel):
    student_id: Optional[str] = None
    roll_number: Optional[str] = None
    subject: str
    marks_obtained: Number
    total_marks: Number = 100
    academic_year: str
    semester: str


# 2. Edit dialog - jo field bheja wahi update hoga
class ResultUpdateSchema(BaseModel):
    subject: Optional[str] = None
    academic_year: Optional[str] = None
    semester: Optional[str] = None
    marks_obtained: Optional[Number] = None
    total_marks: Optional[Number] = None


class GradePreviewResponse(BaseModel):
    percentage: float
    grade: str


class ResultOptionsResponse(BaseModel):
    subjects: List[str]
    academic_years: List[str]
    semesters: List[str]
    recent_academic_years: List[str]  # Entry form ke liye last 5 saal


class NarrationResponse(BaseModel):
    text: str
    rate: float
    pitch: float
    estimated_duration_ms: int
