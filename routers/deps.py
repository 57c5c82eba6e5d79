from fastapi import Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.records import StudentRecord, TeacherRecord
from services.errors import AuthenticationError, NotFoundError, PermissionDeniedError
from services.record_store import RecordStore, SqlRecordStore
from services.result_repository import ResultRepository
from services.user_repository import UserRepository

SESSION_COOKIE = "user_token"


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlRecordStore(db)


def get_user_repository(store: RecordStore = Depends(get_record_store)) -> UserRepository:
    return UserRepository(store)


def get_result_repository(
    store: RecordStore = Depends(get_record_store),
    users: UserRepository = Depends(get_user_repository),
) -> ResultRepository:
    return ResultRepository(store, users)


def get_current_user(request: Request, users: UserRepository = Depends(get_user_repository)):
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise AuthenticationError("Please login first")
    try:
        return users.get_user(token)
    except NotFoundError:
        raise AuthenticationError("Session expired, please login again")


def require_teacher(user=Depends(get_current_user)) -> TeacherRecord:
    if user.role != "teacher":
        raise PermissionDeniedError("Only teachers can do this")
    return user


def require_student(user=Depends(get_current_user)) -> StudentRecord:
    if user.role != "student":
        raise PermissionDeniedError("Only students can do this")
    return user
