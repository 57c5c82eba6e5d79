from fastapi import APIRouter, Depends, Response, responses, status

from routers.deps import SESSION_COOKIE, get_current_user, get_user_repository
from schemas.records import UserPublic
from schemas.users import LoginSchema, RegisterSchema
from services.user_repository import UserRepository

# ✅ Router setup with prefix
router = APIRouter(prefix="/auth", tags=["Authentication"])

SESSION_MAX_AGE = 86400  # 24 Hours valid


def to_public(user) -> UserPublic:
    return UserPublic(**user.model_dump(exclude={"password"}))


# 1. Register (student ya teacher)
@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(data: RegisterSchema, users: UserRepository = Depends(get_user_repository)):
    user = users.register(
        role=data.role,
        name=data.name,
        email=data.email,
        password=data.password,
        confirm_password=data.confirm_password,
        roll_number=data.roll_number,
        voice_over_enabled=data.voice_over_enabled,
    )
    return to_public(user)


# 2. Login Process Route (POST)
@router.post("/login")
def process_login(response: Response, data: LoginSchema, users: UserRepository = Depends(get_user_repository)):
    user = users.authenticate(data.role, data.email, data.password)

    # ✅ Cookie me user id (Middleware aur deps isi se user pehchante hain)
    response.set_cookie(key=SESSION_COOKIE, value=user.id, max_age=SESSION_MAX_AGE, httponly=True)
    return {
        "status": "success",
        "message": f"Welcome back, {user.name}!",
        "user": to_public(user),
        "redirect_url": f"/{data.role}-dashboard",
    }


# 3. Current user
@router.get("/me", response_model=UserPublic)
def who_am_i(user=Depends(get_current_user)):
    return to_public(user)


# 4. Logout Route (GET)
@router.get("/logout")
def logout():
    response = responses.JSONResponse({"status": "success", "redirect_url": "/login"})
    response.delete_cookie(SESSION_COOKIE)
    return response
