from database import SessionLocal, engine, Base
from models.records import RecordCollection  # noqa: F401
from services.errors import ConflictError
from services.record_store import SqlRecordStore
from services.result_repository import ResultRepository
from services.user_repository import UserRepository

# --- MAGICAL LINE (Ye Tables bana degi agar missing hain) ---
Base.metadata.create_all(bind=engine)

DEMO_TEACHER = {"name": "Meena Iyer", "email": "teacher@demo.edu", "password": "teacher123"}

DEMO_STUDENTS = [
    ("Aishwarya Rao", "aishwarya@demo.edu", "CSB101", [82, 78, 75, 88]),
    ("Bharath Kumar", "bharath@demo.edu", "CSB102", [65, 59, 70, 72]),
    ("Chitra Nair", "chitra@demo.edu", "CSB103", [92, 95, 94, 90]),
    ("Dinesh Patel", "dinesh@demo.edu", "CSB104", [45, 50, 40, 55]),
]

SUBJECTS = ["Mathematics", "Physics", "Chemistry", "English"]


def seed_data(db):
    store = SqlRecordStore(db)
    users = UserRepository(store)
    results = ResultRepository(store, users)

    print("🌱 Seeding demo users...")
    try:
        users.register(role="teacher", **DEMO_TEACHER)
        print(f"✅ Added teacher: {DEMO_TEACHER['email']}")
    except ConflictError:
        print(f"ℹ️  Exists: {DEMO_TEACHER['email']}")

    for name, email, roll, marks in DEMO_STUDENTS:
        try:
            student = users.register(
                role="student", name=name, email=email, password="student123", roll_number=roll
            )
        except ConflictError:
            print(f"ℹ️  Exists: {roll}")
            continue

        for semester, offset in (("1", 0), ("2", 5)):
            for subject, score in zip(SUBJECTS, marks):
                results.add_result(
                    student_id=student.id,
                    subject=subject,
                    marks_obtained=min(score + offset, 100),
                    total_marks=100,
                    academic_year="2024-2025",
                    semester=semester,
                )
        print(f"✅ Added: {name} ({roll}) with {len(SUBJECTS) * 2} results")

    print("🎉 Seeding complete!")


if __name__ == "__main__":
    db = SessionLocal()
    try:
        seed_data(db)
    finally:
        db.close()
