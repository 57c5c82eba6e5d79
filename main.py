import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, LOG_LEVEL
from database import engine, Base

# --- IMPORT MODELS (create_all se pehle register hone chahiye) ---
from models.records import RecordCollection  # noqa: F401

# --- IMPORT ROUTERS (APIs) ---
from routers import analytics, auth, dashboard, results, students
from routers.deps import SESSION_COOKIE
from services.errors import ResultServiceError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("academic_voice_hub")

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Academic Voice Hub - Result Management")

# ==========================================
# ✅ SESSION MIDDLEWARE
# ==========================================
PUBLIC_PATHS = {
    "/auth/login",
    "/auth/register",
    "/auth/logout",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
}


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    path = request.url.path

    # Login ke bina sirf public paths allowed hain
    if path not in PUBLIC_PATHS and not path.startswith("/docs"):
        token = request.cookies.get(SESSION_COOKIE)
        if not token:
            return JSONResponse(status_code=401, content={"detail": "Please login first"})

    response = await call_next(request)
    return response


# ==========================================
# ✅ ERROR HANDLING
# ==========================================
@app.exception_handler(ResultServiceError)
async def result_service_error_handler(request: Request, exc: ResultServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ==========================================
# ✅ CORS MIDDLEWARE
# ==========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- REGISTER ROUTERS ---
app.include_router(auth.router)
app.include_router(students.router)
app.include_router(results.router)
app.include_router(analytics.router)
app.include_router(dashboard.router)


@app.get("/health")
def health():
    return {"status": "ok"}
