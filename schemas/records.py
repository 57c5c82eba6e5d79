from pydantic import BaseModel
from typing import Optional, Union

Number = Union[int, float]


# 1. Stored user records ("students" / "teachers" collections)
class TeacherRecord(BaseModel):
    id: str
    name: str
    email: str
    password: str  # Plaintext - demo parity, hashing is out of scope
    role: str = "teacher"


class StudentRecord(BaseModel):
    id: str
    name: str
    email: str
    password: str
    roll_number: str
    voice_over_enabled: bool = False
    role: str = "student"


# 2. Stored result record ("results" collection)
class ResultRecord(BaseModel):
    id: str
    student_id: str
    student_name: str  # Snapshot at creation time, rename hone par update nahi hota
    subject: str
    marks_obtained: Number
    total_marks: Number
    academic_year: str
    semester: str
    grade: str


# 3. Public view of a user (password kabhi bahar nahi jata)
class UserPublic(BaseModel):
    id: str
    name: str
    email: str
    role: str
    roll_number: Optional[str] = None
    voice_over_enabled: Optional[bool] = None
