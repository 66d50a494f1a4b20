# /tests/test_routers.py

import pytest
from fastapi.testclient import TestClient

from scholar_track.main import app
from scholar_track.services.platform_client import PlatformError
from scholar_track.services.platform_schema import COURSE_TABLE, GRADE_TABLE, STUDENT_TABLE
from scholar_track.services.platform_service import get_outbox, get_platform_client


@pytest.fixture
def client(local_platform, outbox):
    """A TestClient wired to an in-memory local platform. The lifespan is not run."""
    local_platform.seed(STUDENT_TABLE, [
        {"Id": 1, "Name": "Ana Ruiz", "first_name_c": "Ana", "last_name_c": "Ruiz",
         "status_c": "active", "grade_level_c": "10th Grade", "gpa_c": 3.6},
        {"Id": 2, "Name": "Ben Okafor", "first_name_c": "Ben", "last_name_c": "Okafor",
         "status_c": "inactive", "grade_level_c": "10th Grade", "gpa_c": 2.4},
    ])
    local_platform.seed(COURSE_TABLE, [{"Id": 10, "Name": "Algebra I", "name_c": "Algebra I", "code_c": "MATH101"}])
    local_platform.seed(GRADE_TABLE, [{"Id": 30, "score_c": 91, "student_id_c": 1, "status_c": "graded"}])

    app.dependency_overrides[get_platform_client] = lambda: local_platform
    app.dependency_overrides[get_outbox] = lambda: outbox
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "Scholar Track API is running!"


def test_list_students_with_filters(client):
    assert [s["Id"] for s in client.get("/api/students").json()] == [1, 2]
    assert [s["Id"] for s in client.get("/api/students", params={"search": "okafor"}).json()] == [2]
    assert [s["Id"] for s in client.get("/api/students", params={"status": "active", "gradeLevel": "10th Grade"}).json()] == [1]


def test_create_student_returns_201_with_defaults(client, outbox):
    response = client.post("/api/students", json={"firstName": "Cam", "lastName": "Lee", "gradeLevel": "9th Grade"})
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "active"
    assert body["gpa"] == 0.0


def test_create_student_rejects_unknown_grade_level(client):
    response = client.post("/api/students", json={"firstName": "Cam", "lastName": "Lee", "gradeLevel": "13th Grade"})
    assert response.status_code == 422


def test_missing_student_is_404_with_notifications(client):
    response = client.get("/api/students/999")
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["message"] == "Student 999 not found"
    assert detail["notifications"] == ["Student 999 not found"]


def test_update_and_delete_student(client):
    response = client.put("/api/students/2", json={"status": "graduated"})
    assert response.status_code == 200
    assert response.json()["status"] == "graduated"

    assert client.delete("/api/students/2").status_code == 204
    assert client.delete("/api/students/2").status_code == 404


def test_enroll_and_remove_through_the_roster_endpoints(client):
    enrolled = client.post("/api/courses/10/students/1")
    assert enrolled.status_code == 200
    assert enrolled.json()["enrolledStudents"] == [1]

    removed = client.delete("/api/courses/10/students/1")
    assert removed.json()["enrolledStudents"] == []

    assert client.post("/api/courses/404/students/1").status_code == 404


def test_stale_course_version_is_409(client):
    response = client.put("/api/courses/10", json={"name": "Algebra II", "version": 7})
    assert response.status_code == 409
    assert "Record was modified by another request" in response.json()["detail"]["notifications"]


def test_transport_failure_is_502(client, local_platform, mocker):
    mocker.patch.object(local_platform, "fetch_records", side_effect=PlatformError("connection refused"))
    response = client.get("/api/grades")
    assert response.status_code == 502
    assert response.json()["detail"]["notifications"] == ["Failed to fetch grades"]


def test_grades_filtered_by_student(client):
    assert [g["Id"] for g in client.get("/api/grades", params={"studentId": 1}).json()] == [30]
    assert client.get("/api/grades", params={"studentId": 2}).json() == []


def test_file_upload_and_listing(client, outbox):
    response = client.post("/api/files", json={
        "fileName": "notes.pdf", "fileType": "application/pdf", "entityType": "curriculum_activity", "entityId": 40,
    })
    assert response.status_code == 201

    listed = client.get("/api/files", params={"entityType": "curriculum_activity", "entityId": 40})
    assert [f["fileName"] for f in listed.json()] == ["notes.pdf"]


def test_overview_report_and_exports(client):
    overview = client.get("/api/reports/overview").json()
    assert overview["totalStudents"] == 2
    assert overview["averageGPA"] == 3.0
    assert overview["gradeDistribution"]["A"] == 1

    students_csv = client.get("/api/reports/export/students")
    assert students_csv.headers["content-type"].startswith("text/csv")
    assert students_csv.text.splitlines()[0] == "First Name,Last Name,Email,Phone,Grade Level,GPA,Status"

    text = client.get("/api/reports/export/overview")
    assert "Total Students: 2" in text.text

    assert client.get("/api/reports/export/unknown").status_code == 422


def test_course_roster_export(client):
    client.post("/api/courses/10/students/2")
    response = client.get("/api/reports/courses/10/roster")
    assert response.status_code == 200
    assert "roster_math101.csv" in response.headers["content-disposition"]
    assert response.text.splitlines()[1].split(",")[1] == "Ben"
