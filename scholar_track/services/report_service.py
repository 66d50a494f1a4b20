# /scholar_track/services/report_service.py

"""
Academic reports built from already-fetched records: the overview
statistics, CSV exports of students, grades and a course roster, and the
plain-text overview export. Nothing here talks to the platform; the reports
router gathers the records and hands them over.
"""

from datetime import date
from typing import Dict, List, Optional

import pandas as pd

from ..models.course_model import Course
from ..models.grade_model import Grade
from ..models.report_model import OverviewReport
from ..models.settings_model import GRADE_LEVELS, LETTER_GRADES, GradingScale
from ..models.student_model import Student, StudentStatus

STUDENT_EXPORT_COLUMNS = ["First Name", "Last Name", "Email", "Phone", "Grade Level", "GPA", "Status"]
GRADE_EXPORT_COLUMNS = ["Student ID", "Assignment ID", "Score", "Status", "Submission Date"]
ROSTER_EXPORT_COLUMNS = ["Student ID", "First Name", "Last Name", "Email", "Grade Level", "Course"]


def _frame(rows: List[Dict], columns: List[str]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns) if rows else pd.DataFrame(columns=columns)


# --- Overview ---

def grade_distribution(grades: List[Grade], scale: GradingScale) -> Dict[str, int]:
    distribution = {letter: 0 for letter in LETTER_GRADES}
    if not grades:
        return distribution

    df = pd.DataFrame([{"score": g.score} for g in grades])
    counts = df["score"].apply(scale.letter_for).value_counts()
    for letter, count in counts.items():
        distribution[letter] = int(count)
    return distribution


def enrollment_by_grade(students: List[Student]) -> Dict[str, int]:
    enrollment = {level: 0 for level in GRADE_LEVELS}
    if not students:
        return enrollment

    counts = pd.DataFrame([{"gradeLevel": s.gradeLevel} for s in students])["gradeLevel"].value_counts()
    for level in GRADE_LEVELS:
        enrollment[level] = int(counts.get(level, 0))
    return enrollment


def build_overview(
    students: List[Student],
    courses: List[Course],
    grades: List[Grade],
    scale: Optional[GradingScale] = None,
) -> OverviewReport:
    """Summary counts, mean GPA, letter-grade distribution and enrollment per grade level."""
    scale = scale or GradingScale()

    average_gpa = 0.0
    active = 0
    if students:
        df = pd.DataFrame([{"gpa": s.gpa or 0.0, "status": s.status} for s in students])
        average_gpa = round(float(df["gpa"].mean()), 2)
        active = int((df["status"] == StudentStatus.ACTIVE.value).sum())

    return OverviewReport(
        totalStudents=len(students),
        activeStudents=active,
        totalCourses=len(courses),
        totalGrades=len(grades),
        averageGPA=average_gpa,
        gradeDistribution=grade_distribution(grades, scale),
        enrollmentByGrade=enrollment_by_grade(students),
    )


# --- Exports ---

def export_students_csv(students: List[Student]) -> str:
    rows = [
        {
            "First Name": s.firstName,
            "Last Name": s.lastName,
            "Email": s.email,
            "Phone": s.phone,
            "Grade Level": s.gradeLevel,
            "GPA": s.gpa,
            "Status": s.status,
        } for s in students
    ]
    return _frame(rows, STUDENT_EXPORT_COLUMNS).to_csv(index=False)


def export_grades_csv(grades: List[Grade]) -> str:
    rows = [
        {
            "Student ID": g.studentId,
            "Assignment ID": g.assignmentId,
            "Score": g.score,
            "Status": g.status,
            "Submission Date": g.submissionDate,
        } for g in grades
    ]
    return _frame(rows, GRADE_EXPORT_COLUMNS).to_csv(index=False)


def export_roster_csv(course: Course, students: List[Student]) -> str:
    """One row per enrolled student, in enrollment order. Unknown ids are skipped."""
    by_id = {s.Id: s for s in students}
    rows = [
        {
            "Student ID": by_id[member].studentId,
            "First Name": by_id[member].firstName,
            "Last Name": by_id[member].lastName,
            "Email": by_id[member].email,
            "Grade Level": by_id[member].gradeLevel,
            "Course": course.name,
        } for member in course.enrolledStudents if member in by_id
    ]
    return _frame(rows, ROSTER_EXPORT_COLUMNS).to_csv(index=False)


def _letter_ranges(scale: GradingScale) -> Dict[str, str]:
    return {
        "A": f"{scale.aMin}-100%",
        "B": f"{scale.bMin}-{scale.aMin - 1}%",
        "C": f"{scale.cMin}-{scale.bMin - 1}%",
        "D": f"{scale.dMin}-{scale.cMin - 1}%",
        "F": f"0-{scale.dMin - 1}%",
    }


def export_overview_text(
    report: OverviewReport,
    scale: Optional[GradingScale] = None,
    generated_on: Optional[date] = None,
) -> str:
    scale = scale or GradingScale()
    generated_on = generated_on or date.today()
    ranges = _letter_ranges(scale)

    lines = [
        "Scholar Track - Academic Overview Report",
        f"Generated: {generated_on.isoformat()}",
        "",
        "SUMMARY STATISTICS",
        f"Total Students: {report.totalStudents}",
        f"Active Students: {report.activeStudents}",
        f"Total Courses: {report.totalCourses}",
        f"Total Grades: {report.totalGrades}",
        f"Average GPA: {report.averageGPA:.2f}",
        "",
        "GRADE DISTRIBUTION",
    ]
    lines += [f"{letter} ({ranges[letter]}): {report.gradeDistribution.get(letter, 0)}" for letter in LETTER_GRADES]
    lines += ["", "ENROLLMENT BY GRADE LEVEL"]
    lines += [f"{level}: {report.enrollmentByGrade.get(level, 0)}" for level in GRADE_LEVELS]
    return "\n".join(lines)
