"""
Result Report

``build_report`` turns a list of results into semester sections with their
own totals; ``render_report_pdf`` lays those sections out as a paginated A4
document with a footer on every page.
"""
import logging
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config import SCHOOL_NAME
from schemas.records import ResultRecord
from services.grading import format_number, grade, percentage, round2

logger = logging.getLogger(__name__)

ACADEMIC_BLUE = HexColor("#216EB4")
TABLE_HEADER = ["Subject", "Marks Obtained", "Total Marks", "Grade"]


@dataclass
class ReportRow:
    subject: str
    marks_obtained: float
    total_marks: float
    grade: str


@dataclass
class ReportSection:
    title: str  # "2024-2025 - Semester 1"
    rows: List[ReportRow] = field(default_factory=list)
    total_obtained: float = 0
    total_possible: float = 0
    percentage: float = 0
    overall_grade: str = "F"


@dataclass
class StudentReport:
    student_name: str
    roll_number: str
    sections: List[ReportSection]
    filename: str


@dataclass
class RenderedReport:
    content: bytes
    page_count: int
    filename: str


def report_filename(student_name: str, ext: str = "pdf") -> str:
    safe_name = re.sub(r"\s+", "_", student_name.strip())
    return f"{safe_name}_Result_Report.{ext}"


def build_report(results: Sequence[ResultRecord], student_name: str, roll_number: str) -> StudentReport:
    groups = OrderedDict()
    for result in results:
        key = f"{result.academic_year} - Semester {result.semester}"
        groups.setdefault(key, []).append(result)

    sections = []
    for title, members in groups.items():
        total_obtained = sum(r.marks_obtained for r in members)
        total_possible = sum(r.total_marks for r in members)
        # Overall grade alag se nikalte hain, kisi ek result ka grade copy nahi hota
        section_pct = round2(percentage(total_obtained, total_possible))
        sections.append(
            ReportSection(
                title=title,
                rows=[ReportRow(r.subject, r.marks_obtained, r.total_marks, r.grade) for r in members],
                total_obtained=total_obtained,
                total_possible=total_possible,
                percentage=section_pct,
                overall_grade=grade(section_pct),
            )
        )

    return StudentReport(
        student_name=student_name,
        roll_number=roll_number,
        sections=sections,
        filename=report_filename(student_name),
    )


# ===========================
#      PDF RENDERING
# ===========================

def _numbered_canvas(footer_title: str, page_counter: list):
    """Canvas class that stamps "Page i of N" once the total is known."""

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            total_pages = len(self._saved_page_states)
            page_counter.append(total_pages)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(total_pages)
                super().showPage()
            super().save()

        def _draw_footer(self, total_pages):
            page_width = A4[0]
            self.saveState()
            self.setFont("Helvetica", 8)
            self.setFillColor(colors.grey)
            self.drawCentredString(page_width / 2.0, 12 * mm, footer_title)
            self.drawRightString(page_width - 14 * mm, 12 * mm, f"Page {self._pageNumber} of {total_pages}")
            self.restoreState()

    return NumberedCanvas


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="ReportTitle",
        parent=styles["Title"],
        fontSize=20,
        textColor=ACADEMIC_BLUE,
        alignment=TA_CENTER,
        spaceAfter=4,
    ))
    styles.add(ParagraphStyle(
        name="Institution",
        parent=styles["Normal"],
        fontSize=14,
        textColor=ACADEMIC_BLUE,
        alignment=TA_CENTER,
        spaceAfter=12,
    ))
    styles.add(ParagraphStyle(
        name="SectionHeading",
        parent=styles["Heading3"],
        textColor=ACADEMIC_BLUE,
        spaceBefore=10,
        spaceAfter=6,
    ))
    styles.add(ParagraphStyle(
        name="Muted",
        parent=styles["Normal"],
        fontSize=10,
        textColor=HexColor("#646464"),
    ))
    return styles


def _section_flowables(section: ReportSection, styles):
    data = [TABLE_HEADER] + [
        [row.subject, format_number(row.marks_obtained), format_number(row.total_marks), row.grade]
        for row in section.rows
    ]
    table = Table(data, colWidths=[70 * mm, 40 * mm, 40 * mm, 30 * mm], hAlign="LEFT")
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.3, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), ACADEMIC_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, HexColor("#F0F0F0")]),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))

    summary = Table(
        [[
            Paragraph(
                f"Total Marks: {format_number(section.total_obtained)}/{format_number(section.total_possible)}",
                styles["Muted"],
            ),
            Paragraph(f"Percentage: {section.percentage:.2f}%", styles["Muted"]),
            Paragraph(f"Overall Grade: {section.overall_grade}", styles["Muted"]),
        ]],
        colWidths=[70 * mm, 60 * mm, 50 * mm],
        hAlign="LEFT",
    )

    return KeepTogether([
        Paragraph(escape(section.title), styles["SectionHeading"]),
        table,
        Spacer(1, 4),
        summary,
        Spacer(1, 10),
    ])


def render_report_pdf(
    report: StudentReport,
    generated_on: Optional[date] = None,
    institution: str = SCHOOL_NAME,
) -> RenderedReport:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=18 * mm,
        bottomMargin=22 * mm,
        title=f"{report.student_name} - Result Report",
        author=institution,
    )
    styles = _styles()
    generated_on = generated_on or date.today()

    story = [
        Paragraph("Academic Result Report", styles["ReportTitle"]),
        Paragraph(escape(institution), styles["Institution"]),
    ]
    info = Table(
        [
            [Paragraph(f"Student Name: {escape(report.student_name)}", styles["Muted"]),
             Paragraph(f"Date: {generated_on.strftime('%d %b %Y')}", styles["Muted"])],
            [Paragraph(f"Roll Number: {escape(report.roll_number)}", styles["Muted"]), ""],
        ],
        colWidths=[120 * mm, 60 * mm],
        hAlign="LEFT",
    )
    info.setStyle(TableStyle([("LINEABOVE", (0, 0), (-1, 0), 0.5, HexColor("#DCDCDC"))]))
    story += [info, Spacer(1, 8)]

    for section in report.sections:
        story.append(_section_flowables(section, styles))

    page_counter = []
    doc.build(story, canvasmaker=_numbered_canvas(f"{institution} - Official Result Document", page_counter))

    page_count = page_counter[-1] if page_counter else 0
    logger.info("Rendered %s (%d sections, %d pages)", report.filename, len(report.sections), page_count)
    return RenderedReport(content=buffer.getvalue(), page_count=page_count, filename=report.filename)
