"""
User Repository

Registration and lookup for the two roles. Students live in the
``students`` collection and teachers in ``teachers``; email is unique within
a role and roll number is unique among students.
"""
import logging
from typing import List, Optional, Union

from schemas.records import StudentRecord, TeacherRecord
from services import record_store
from services.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ROLES = ("student", "teacher")

User = Union[StudentRecord, TeacherRecord]


def _collection_for(role: str) -> str:
    if role == "student":
        return record_store.STUDENTS
    if role == "teacher":
        return record_store.TEACHERS
    raise ValidationError("Role must be either student or teacher")


def role_from_id(user_id: str) -> Optional[str]:
    prefix = (user_id or "").split("_", 1)[0]
    return prefix if prefix in ROLES else None


class UserRepository:
    def __init__(self, store: record_store.RecordStore):
        self.store = store

    def register(
        self,
        role,
        name,
        email,
        password,
        roll_number=None,
        voice_over_enabled=False,
        confirm_password=None,
    ) -> User:
        collection = _collection_for(role)

        name = (name or "").strip()
        email = (email or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if not email:
            raise ValidationError("Email is required")
        if not password:
            raise ValidationError("Password is required")
        if confirm_password is not None and password != confirm_password:
            raise ValidationError("Passwords do not match")

        roll_number = (roll_number or "").strip()
        if role == "student" and not roll_number:
            raise ValidationError("Roll number is required")

        users = self.store.read(collection)

        if any(user.get("email") == email for user in users):
            logger.warning("Registration rejected: %s email already registered", role)
            raise ConflictError("Email already registered")

        if role == "student" and any(user.get("roll_number") == roll_number for user in users):
            logger.warning("Registration rejected: roll number %s already registered", roll_number)
            raise ConflictError("Roll number already registered")

        user_id = record_store.new_record_id(role, (user.get("id") for user in users))
        if role == "student":
            user = StudentRecord(
                id=user_id,
                name=name,
                email=email,
                password=password,
                roll_number=roll_number,
                voice_over_enabled=bool(voice_over_enabled),
            )
        else:
            user = TeacherRecord(id=user_id, name=name, email=email, password=password)

        users.append(user.model_dump())
        self.store.write(collection, users)

        logger.info("Registered %s %s (%s)", role, user.id, user.name)
        return user

    def authenticate(self, role, email, password) -> User:
        collection = _collection_for(role)
        for user in self.store.read(collection):
            if user.get("email") == email and user.get("password") == password:
                return self._to_record(role, user)
        raise AuthenticationError("Invalid email or password")

    def get_user(self, user_id) -> User:
        role = role_from_id(user_id)
        if role is None:
            raise NotFoundError("User not found")
        for user in self.store.read(_collection_for(role)):
            if user.get("id") == user_id:
                return self._to_record(role, user)
        raise NotFoundError("User not found")

    def get_student(self, student_id) -> StudentRecord:
        for user in self.store.read(record_store.STUDENTS):
            if user.get("id") == student_id:
                return StudentRecord(**user)
        raise NotFoundError("No student found with this id")

    def find_student_by_roll_number(self, roll_number) -> StudentRecord:
        roll_number = (roll_number or "").strip()
        if not roll_number:
            raise ValidationError("Roll number is required")
        for user in self.store.read(record_store.STUDENTS):
            if user.get("roll_number") == roll_number:
                return StudentRecord(**user)
        raise NotFoundError("No student found with the provided roll number")

    def list_students(self) -> List[StudentRecord]:
        return [StudentRecord(**user) for user in self.store.read(record_store.STUDENTS)]

    def set_voice_over(self, student_id, enabled: Optional[bool] = None) -> StudentRecord:
        """Set the voice-over preference; ``enabled=None`` toggles it."""
        students = self.store.read(record_store.STUDENTS)
        for user in students:
            if user.get("id") == student_id:
                current = bool(user.get("voice_over_enabled", False))
                user["voice_over_enabled"] = (not current) if enabled is None else bool(enabled)
                self.store.write(record_store.STUDENTS, students)
                logger.info("Voice-over %s for %s", "enabled" if user["voice_over_enabled"] else "disabled", student_id)
                return StudentRecord(**user)
        raise NotFoundError("No student found with this id")

    @staticmethod
    def _to_record(role, data) -> User:
        if role == "student":
            return StudentRecord(**data)
        return TeacherRecord(**data)
