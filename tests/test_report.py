"""
Unit Tests for the result report (grouping contract + PDF rendering)
"""
from datetime import date

from schemas.records import ResultRecord
from services.report import build_report, render_report_pdf, report_filename


def make_result(n, subject, marks, total, year, semester, grade):
    return ResultRecord(
        id=f"result_{n}",
        student_id="student_1",
        student_name="Asha Verma",
        subject=subject,
        marks_obtained=marks,
        total_marks=total,
        academic_year=year,
        semester=semester,
        grade=grade,
    )


class TestBuildReport:
    def test_groups_in_first_seen_order(self):
        results = [
            make_result(1, "Physics", 90, 100, "2024-2025", "2", "A+"),
            make_result(2, "Maths", 40, 100, "2023-2024", "1", "F"),
            make_result(3, "Art", 70, 100, "2024-2025", "2", "B"),
        ]

        report = build_report(results, "Asha Verma", "CS101")

        assert [s.title for s in report.sections] == [
            "2024-2025 - Semester 2",
            "2023-2024 - Semester 1",
        ]
        assert [row.subject for row in report.sections[0].rows] == ["Physics", "Art"]

    def test_section_summary_is_rederived(self):
        # Stored grades deliberately disagree with the section total
        results = [
            make_result(1, "Physics", 45, 50, "2024-2025", "1", "F"),
            make_result(2, "Maths", 40, 50, "2024-2025", "1", "F"),
        ]

        section = build_report(results, "Asha Verma", "CS101").sections[0]

        assert section.total_obtained == 85
        assert section.total_possible == 100
        assert section.percentage == 85
        assert section.overall_grade == "A"

    def test_percentage_rounded_to_two_decimals(self):
        results = [make_result(1, "Physics", 2, 3, "2024-2025", "1", "B")]
        assert build_report(results, "A", "1").sections[0].percentage == 66.67

    def test_empty_results(self):
        report = build_report([], "Asha Verma", "CS101")
        assert report.sections == []


class TestReportFilename:
    def test_whitespace_replaced(self):
        assert report_filename("Asha  Verma") == "Asha_Verma_Result_Report.pdf"
        assert report_filename("Asha Rani Verma", ext="csv") == "Asha_Rani_Verma_Result_Report.csv"
        assert report_filename("Asha") == "Asha_Result_Report.pdf"


class TestRenderReportPdf:
    def test_renders_pdf_bytes(self):
        results = [make_result(1, "Physics", 90, 100, "2024-2025", "1", "A+")]
        report = build_report(results, "Asha & Co", "CS<101>")

        rendered = render_report_pdf(report, generated_on=date(2025, 5, 1))

        assert rendered.content.startswith(b"%PDF")
        assert rendered.page_count == 1
        assert rendered.filename == "Asha_&_Co_Result_Report.pdf"

    def test_overflow_paginates(self):
        results = []
        n = 0
        for year in ("2021-2022", "2022-2023", "2023-2024", "2024-2025"):
            for semester in ("1", "2", "3"):
                for subject in ("Physics", "Chemistry", "Maths", "English", "Biology", "Art"):
                    n += 1
                    results.append(make_result(n, subject, 70, 100, year, semester, "B"))

        rendered = render_report_pdf(build_report(results, "Asha Verma", "CS101"))

        assert rendered.page_count > 1
        assert rendered.content.startswith(b"%PDF")
