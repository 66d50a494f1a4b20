# /tests/test_report_service.py

from datetime import date

import pytest
from pydantic import ValidationError

from scholar_track.models.course_model import Course
from scholar_track.models.grade_model import Grade
from scholar_track.models.settings_model import GradingScale
from scholar_track.models.student_model import Student
from scholar_track.services import report_service

# --- Test Data Fixtures ---

@pytest.fixture
def students():
    return [
        Student(Id=1, firstName="Ana", lastName="Ruiz", email="ana@school.edu", gradeLevel="9th Grade", gpa=3.5, status="active"),
        Student(Id=2, firstName="Ben", lastName="Okafor", gradeLevel="9th Grade", gpa=2.5, status="inactive"),
        Student(Id=3, firstName="Carla", lastName="Diaz", gradeLevel="12th Grade", gpa=3.0, status="active"),
    ]


@pytest.fixture
def grades():
    return [
        Grade(Id=30, score=95, studentId=1, assignmentId=20, status="graded"),
        Grade(Id=31, score=90, studentId=2, assignmentId=20),
        Grade(Id=32, score=85.5, studentId=3, assignmentId=20),
        Grade(Id=33, score=59.9, studentId=1, assignmentId=21),
    ]


@pytest.fixture
def course():
    return Course(Id=10, name="Algebra I", code="MATH101", enrolledStudents=[3, 1, 99])

# --- Unit Tests ---

def test_overview_statistics(students, grades, course):
    report = report_service.build_overview(students, [course], grades)

    assert report.totalStudents == 3
    assert report.activeStudents == 2
    assert report.totalCourses == 1
    assert report.totalGrades == 4
    assert report.averageGPA == 3.0
    assert report.gradeDistribution == {"A": 2, "B": 1, "C": 0, "D": 0, "F": 1}
    assert report.enrollmentByGrade == {"9th Grade": 2, "10th Grade": 0, "11th Grade": 0, "12th Grade": 1}


def test_overview_of_empty_school_is_all_zeros():
    report = report_service.build_overview([], [], [])
    assert report.averageGPA == 0.0
    assert set(report.gradeDistribution.values()) == {0}
    assert set(report.enrollmentByGrade.values()) == {0}


def test_custom_grading_scale_moves_the_boundaries(grades):
    strict = GradingScale(aMin=96, bMin=86, cMin=76, dMin=66)
    assert report_service.grade_distribution(grades, strict) == {"A": 0, "B": 2, "C": 1, "D": 0, "F": 1}


def test_grading_scale_must_descend():
    with pytest.raises(ValidationError):
        GradingScale(aMin=80, bMin=80, cMin=70, dMin=60)


def test_students_csv_has_the_export_header(students):
    lines = report_service.export_students_csv(students).splitlines()
    assert lines[0] == "First Name,Last Name,Email,Phone,Grade Level,GPA,Status"
    assert lines[1] == "Ana,Ruiz,ana@school.edu,,9th Grade,3.5,active"
    assert len(lines) == 4


def test_grades_csv_and_empty_exports(grades):
    lines = report_service.export_grades_csv(grades).splitlines()
    assert lines[0] == "Student ID,Assignment ID,Score,Status,Submission Date"
    assert lines[1].startswith("1,20,95.0,graded,")

    assert report_service.export_grades_csv([]).splitlines() == [lines[0]]


def test_roster_csv_follows_enrollment_order_and_skips_unknown_ids(students, course):
    lines = report_service.export_roster_csv(course, students).splitlines()
    assert lines[0] == "Student ID,First Name,Last Name,Email,Grade Level,Course"
    assert [line.split(",")[1] for line in lines[1:]] == ["Carla", "Ana"]


def test_overview_text_report(students, grades, course):
    report = report_service.build_overview(students, [course], grades)
    text = report_service.export_overview_text(report, generated_on=date(2024, 9, 1))

    assert text.startswith("Scholar Track - Academic Overview Report\nGenerated: 2024-09-01")
    assert "Average GPA: 3.00" in text
    assert "A (90-100%): 2" in text
    assert "F (0-59%): 1" in text
    assert "12th Grade: 1" in text
