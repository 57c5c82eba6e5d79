"""
Integration Tests for the HTTP API
Tests for: auth/session, teacher result management, analytics, student portal
"""


def add_result(client, **overrides):
    payload = {
        "roll_number": "CS101",
        "subject": "Physics",
        "marks_obtained": 90,
        "total_marks": 100,
        "academic_year": "2024-2025",
        "semester": "1",
    }
    payload.update(overrides)
    return client.post("/results", json=payload)


class TestAuth:
    def test_requires_login(self, make_client):
        client = make_client()
        assert client.get("/results").status_code == 401
        assert client.get("/health").status_code == 200

    def test_register_hides_password(self, make_client):
        client = make_client()
        response = client.post(
            "/auth/register",
            json={"role": "student", "name": "Asha", "email": "a@x.com", "password": "p", "roll_number": "R1"},
        )
        assert response.status_code == 201
        assert "password" not in response.json()
        assert response.json()["roll_number"] == "R1"

    def test_duplicate_roll_number(self, make_client, student_client):
        client = make_client()
        response = client.post(
            "/auth/register",
            json={"role": "student", "name": "Other", "email": "o@x.com", "password": "p", "roll_number": "CS101"},
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Roll number already registered"

    def test_invalid_login(self, make_client, student_client):
        client = make_client()
        response = client.post("/auth/login", json={"role": "student", "email": "asha@example.com", "password": "bad"})
        assert response.status_code == 401

    def test_me_and_logout(self, student_client):
        assert student_client.get("/auth/me").json()["name"] == "Asha Verma"
        student_client.get("/auth/logout")
        assert student_client.get("/auth/me").status_code == 401

    def test_role_separation(self, teacher_client, student_client):
        assert student_client.get("/results").status_code == 403
        assert student_client.get("/analytics").status_code == 403
        assert teacher_client.get("/students/me/results").status_code == 403


class TestTeacherResults:
    def test_add_by_roll_number(self, teacher_client, student_client):
        response = add_result(teacher_client, marks_obtained=85)

        assert response.status_code == 201
        body = response.json()
        assert body["grade"] == "A"
        assert body["student_id"] == student_client.user["id"]
        assert body["student_name"] == "Asha Verma"

    def test_add_rejects_bad_marks(self, teacher_client, student_client):
        assert add_result(teacher_client, marks_obtained=120).status_code == 422
        assert add_result(teacher_client, total_marks=0).status_code == 422
        assert teacher_client.get("/results").json() == []

    def test_add_unknown_roll_number(self, teacher_client):
        response = add_result(teacher_client, roll_number="NOPE")
        assert response.status_code == 404

    def test_lookup_student(self, teacher_client, student_client):
        response = teacher_client.get("/students/lookup", params={"roll_number": "CS101"})
        assert response.status_code == 200
        assert response.json()["name"] == "Asha Verma"

    def test_update_and_delete(self, teacher_client, student_client):
        result_id = add_result(teacher_client).json()["id"]

        updated = teacher_client.put(f"/results/{result_id}", json={"marks_obtained": 55})
        assert updated.status_code == 200
        assert updated.json()["grade"] == "D"
        assert updated.json()["subject"] == "Physics"

        assert teacher_client.delete(f"/results/{result_id}").status_code == 204
        assert teacher_client.delete(f"/results/{result_id}").status_code == 204
        assert teacher_client.get(f"/results/{result_id}").status_code == 404

    def test_update_missing(self, teacher_client):
        assert teacher_client.put("/results/result_1", json={"subject": "Art"}).status_code == 404

    def test_filters_and_search(self, teacher_client, student_client):
        add_result(teacher_client, subject="Physics")
        add_result(teacher_client, subject="Chemistry", semester="2")

        assert len(teacher_client.get("/results", params={"semester": "2"}).json()) == 1
        assert len(teacher_client.get("/results", params={"search": "chem"}).json()) == 1
        assert len(teacher_client.get("/results", params={"subject": "all_subjects"}).json()) == 2

    def test_grade_preview_and_options(self, teacher_client, student_client):
        preview = teacher_client.get("/results/grade-preview", params={"marks_obtained": 45, "total_marks": 50})
        assert preview.json() == {"percentage": 90.0, "grade": "A+"}

        add_result(teacher_client, subject="Physics")
        options = teacher_client.get("/results/options").json()
        assert options["subjects"] == ["Physics"]
        assert len(options["recent_academic_years"]) == 5


class TestAnalyticsAndDashboard:
    def test_analytics(self, teacher_client, student_client, make_client, signup):
        other = make_client()
        signup(other, "student", "Ravi Kumar", "ravi@example.com", roll_number="CS102")

        add_result(teacher_client, marks_obtained=80)
        add_result(teacher_client, marks_obtained=60, subject="Maths")
        add_result(teacher_client, roll_number="CS102", marks_obtained=100)

        data = teacher_client.get("/analytics").json()

        assert data["total_results"] == 3
        assert [(s["student_name"], s["average_percentage"]) for s in data["student_performance"]] == [
            ("Ravi Kumar", 100),
            ("Asha Verma", 70),
        ]
        assert set(data["grade_distribution"]) == {"A+", "A", "B", "C", "D", "F"}
        assert data["student_breakdown"] is None

        single = teacher_client.get("/analytics", params={"student_id": student_client.user["id"]}).json()
        assert [row["subject"] for row in single["student_breakdown"]] == ["Physics", "Maths"]

    def test_dashboard(self, teacher_client, student_client):
        for subject in ("Physics", "Maths"):
            add_result(teacher_client, subject=subject)

        data = teacher_client.get("/dashboard").json()

        assert data["total_students"] == 1
        assert data["total_results"] == 2
        assert [r["subject"] for r in data["recent_results"]] == ["Maths", "Physics"]


class TestStudentPortal:
    def test_results_and_summary(self, teacher_client, student_client):
        add_result(teacher_client, marks_obtained=90)
        add_result(teacher_client, subject="Maths", marks_obtained=60, semester="2")

        assert len(student_client.get("/students/me/results").json()) == 2
        assert len(student_client.get("/students/me/results", params={"semester": "2"}).json()) == 1

        summary = student_client.get("/students/me/summary").json()
        assert summary["summary"]["overall_percentage"] == 75.0
        assert summary["semesters"] == ["1", "2"]

    def test_report_download(self, teacher_client, student_client):
        add_result(teacher_client)

        response = student_client.get("/students/me/report")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "Asha_Verma_Result_Report.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_report_with_no_results(self, student_client):
        assert student_client.get("/students/me/report").status_code == 404

    def test_narration(self, teacher_client, student_client):
        add_result(teacher_client)

        data = student_client.get("/students/me/narration", params={"year": "2024-2025"}).json()

        assert data["text"] == (
            "Results for Asha Verma, Roll Number CS101. Academic Year 2024-2025. "
            "Total subjects: 1. Overall percentage: 90 percent. "
            "Subject: Physics. Marks: 90 out of 100. Grade: A+."
        )
        assert data["estimated_duration_ms"] == round(len(data["text"]) * 65)

    def test_narration_requires_voice_over(self, teacher_client, student_client):
        add_result(teacher_client)
        student_client.post("/students/me/voice-over", json={"enabled": False})

        assert student_client.get("/students/me/narration").status_code == 403

        toggled = student_client.post("/students/me/voice-over")
        assert toggled.json()["voice_over_enabled"] is True
        assert student_client.get("/students/me/narration").status_code == 200

    def test_narration_honours_search(self, teacher_client, student_client):
        add_result(teacher_client, subject="Physics")
        add_result(teacher_client, subject="Maths")

        data = student_client.get("/students/me/narration", params={"search": "phys"}).json()

        assert "Total subjects: 1." in data["text"]
        assert "Subject: Physics." in data["text"]
        assert "Maths" not in data["text"]

    def test_report_filename_with_accents_and_apostrophe(self, teacher_client, make_client, signup):
        client = make_client()
        signup(client, "student", "José O'Brien", "jose@example.com", roll_number="CS150")
        add_result(teacher_client, roll_number="CS150")

        disposition = client.get("/students/me/report").headers["content-disposition"]

        assert "filename=\"Jose_O'Brien_Result_Report.pdf\"" in disposition
        assert "filename*=UTF-8''Jos%C3%A9_O%27Brien_Result_Report.pdf" in disposition

    def test_recent_results_only_mine(self, teacher_client, student_client, make_client, signup):
        signup(make_client(), "student", "Ravi Kumar", "ravi@example.com", roll_number="CS102")
        add_result(teacher_client, subject="Physics")
        add_result(teacher_client, roll_number="CS102", subject="Biology")
        add_result(teacher_client, subject="Maths")

        recent = student_client.get("/students/me/recent").json()

        assert [r["subject"] for r in recent] == ["Maths", "Physics"]
