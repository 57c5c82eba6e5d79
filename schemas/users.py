from pydantic import BaseModel
from typing import Literal, Optional


# 1. Registration form (student ya teacher)
class RegisterSchema(BaseModel):
    role: Literal["student", "teacher"]
    name: str
    email: str
    password: str
    confirm_password: Optional[str] = None
    roll_number: Optional[str] = None   # Sirf students ke liye
    voice_over_enabled: bool = False


# 2. Login form
class LoginSchema(BaseModel):
    role: Literal["student", "teacher"]
    email: str
    password: str


class VoiceOverSchema(BaseModel):
    enabled: Optional[bool] = None  # None = toggle
