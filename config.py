import os

# --- DATABASE ---
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./results.db")
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- BRANDING (report header/footer) ---
SCHOOL_NAME = os.environ.get("SCHOOL_NAME", "Academic Voice Hub")

# --- VOICE-OVER ---
SPEECH_RATE = float(os.environ.get("SPEECH_RATE", "1.0"))
SPEECH_PITCH = float(os.environ.get("SPEECH_PITCH", "1.0"))

# --- ANALYTICS ---
TOP_STUDENTS_LIMIT = int(os.environ.get("TOP_STUDENTS_LIMIT", "10"))
RECENT_RESULTS_LIMIT = int(os.environ.get("RECENT_RESULTS_LIMIT", "5"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
