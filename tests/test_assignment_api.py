"""Tests for assignment and progress API endpoints."""

from __future__ import annotations

import datetime
import typing as t

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from brainburst import storage
from brainburst.model import Actor, Assignment, AssignmentID, ClassRoster, ProgressRecord, ProgressStatus, \
    StandardResult, SYSTEM_ACTOR, TestID, UserID, UserRole

AuthHeaders = t.Callable[[Actor], dict[str, str]]


class TestAuthentication(object):
    """Tests for bearer token handling."""

    def test_missing_token(self, client: TestClient, assignment_factory: t.Callable[..., Assignment]) -> None:
        """Returns 401 without a bearer token."""
        assignment = assignment_factory()

        response = client.get(f"/api/assignments/{assignment.assignment_id}/progress")

        assert response.status_code == 401

    def test_invalid_token(self, client: TestClient, assignment_factory: t.Callable[..., Assignment]) -> None:
        """Returns 401 for a token signed with another key."""
        assignment = assignment_factory()

        response = client.get(
            f"/api/assignments/{assignment.assignment_id}/progress",
            headers={"Authorization": "Bearer not-a-real-token"},
        )

        assert response.status_code == 401

    def test_wrong_role(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        student: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 403 when a student calls a teacher endpoint."""
        assignment = assignment_factory()

        response = client.get(f"/api/assignments/{assignment.assignment_id}/progress", headers=auth_headers(student))

        assert response.status_code == 403


class TestCreateAssignment(object):
    """Tests for POST /api/assignments."""

    def test_create(
        self,
        client: TestClient,
        db_session: Session,
        classroom: ClassRoster,
        teacher: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Creates the assignment and seeds the class's records."""
        response = client.post(
            "/api/assignments",
            json={
                "class_id": str(classroom.class_id),
                "test_id": str(TestID()),
                "title": "Chapter 7 Review",
                "due_date": "2026-05-01T17:00:00-04:00",
                "attempts_allowed": 2,
                "max_score": 25,
            },
            headers=auth_headers(teacher),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Chapter 7 Review"
        assert data["archival_state"] == "active"
        assert data["attempts_allowed"] == 2
        assert datetime.datetime.fromisoformat(data["due_date"]) == datetime.datetime(
            2026, 5, 1, 21, 0, tzinfo=datetime.UTC
        )
        with db_session.begin():
            record = storage.progress.get(data["assignment_id"], student_id, session=db_session)
        assert record is not None
        assert record.stored_status is ProgressStatus.Assigned

    def test_invalid_attempts(
        self,
        client: TestClient,
        classroom: ClassRoster,
        teacher: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 422 for a non-positive attempt limit."""
        response = client.post(
            "/api/assignments",
            json={
                "class_id": str(classroom.class_id),
                "test_id": str(TestID()),
                "title": "Quiz",
                "attempts_allowed": 0,
            },
            headers=auth_headers(teacher),
        )

        assert response.status_code == 422
        assert response.json()["code"] == "invalid_assignment"

    def test_other_teachers_class(
        self,
        client: TestClient,
        classroom: ClassRoster,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 403 when assigning to someone else's class."""
        stranger = Actor(user_id=UserID(), role=UserRole.Teacher)

        response = client.post(
            "/api/assignments",
            json={"class_id": str(classroom.class_id), "test_id": str(TestID()), "title": "Quiz"},
            headers=auth_headers(stranger),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"


class TestStudentProgress(object):
    """Tests for the student's start and submit endpoints."""

    def test_start_then_submit(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        student: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """A student starts an attempt, submits it and sees the result."""
        assignment = assignment_factory(attempts_allowed=2)
        base = f"/api/assignments/{assignment.assignment_id}/progress"

        started = client.post(f"{base}/start", headers=auth_headers(student))
        assert started.status_code == 200
        assert started.json()["status"] == "in_progress"
        assert started.json()["attempts_remaining"] == 1

        submitted = client.post(f"{base}/submit", json={"score": 17, "total": 20}, headers=auth_headers(student))
        assert submitted.status_code == 200
        assert submitted.json()["status"] == "submitted"
        assert submitted.json()["best_score"] == 85.0

        mine = client.get(f"{base}/me", headers=auth_headers(student))
        assert mine.status_code == 200
        assert mine.json()["attempt_count"] == 1

    def test_start_exhausted(
        self,
        client: TestClient,
        db_session: Session,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        student: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 409 with the reason and leaves the record blocked."""
        assignment = assignment_factory(attempts_allowed=1)
        progress_factory(assignment, stored_status=ProgressStatus.Submitted, attempt_count=1)

        response = client.post(
            f"/api/assignments/{assignment.assignment_id}/progress/start", headers=auth_headers(student)
        )

        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"
        assert response.json()["reason"] == "attempts_exhausted"
        with db_session.begin():
            record = storage.progress.get(assignment.assignment_id, student_id, session=db_session)
        assert record is not None
        assert record.stored_status is ProgressStatus.Blocked

    def test_submit_not_submittable(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        student: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 409 when submitting a graded record."""
        assignment = assignment_factory()
        progress_factory(assignment, stored_status=ProgressStatus.Graded)

        response = client.post(
            f"/api/assignments/{assignment.assignment_id}/progress/submit",
            json={"score": 1, "total": 1},
            headers=auth_headers(student),
        )

        assert response.status_code == 409
        assert response.json()["reason"] == "not_submittable"

    def test_system_submission(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """The grading pipeline submits on a student's behalf."""
        assignment = assignment_factory()
        progress_factory(assignment, stored_status=ProgressStatus.InProgress, attempt_count=1)

        response = client.post(
            f"/api/assignments/{assignment.assignment_id}/progress/submit",
            json={"score": 3, "total": 4, "student_id": str(student_id)},
            headers=auth_headers(SYSTEM_ACTOR),
        )

        assert response.status_code == 200
        assert response.json()["student_id"] == str(student_id)
        assert response.json()["best_score"] == 75.0

    def test_unknown_assignment(self, client: TestClient, student: Actor, auth_headers: AuthHeaders) -> None:
        """Returns 404 for an unknown assignment."""
        response = client.post(f"/api/assignments/{AssignmentID()}/progress/start", headers=auth_headers(student))

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestTeacherProgress(object):
    """Tests for the teacher's progress endpoints."""

    def test_list_progress(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        teacher: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Lists every student with an effective status."""
        assignment = assignment_factory(due_date=datetime.datetime(2026, 1, 5, tzinfo=datetime.UTC))
        progress_factory(assignment, stored_status=ProgressStatus.InProgress)

        response = client.get(f"/api/assignments/{assignment.assignment_id}/progress", headers=auth_headers(teacher))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["progress"][0]["status"] == "overdue"
        assert data["progress"][0]["stored_status"] == "in_progress"

    def test_grade_override(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        teacher: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Grades a submitted record with a score and comment."""
        assignment = assignment_factory()
        progress_factory(assignment, stored_status=ProgressStatus.Submitted, best_score=50.0)

        response = client.put(
            f"/api/assignments/{assignment.assignment_id}/progress/{student_id}/status",
            json={"status": "graded", "score": 95, "comment": "Great improvement"},
            headers=auth_headers(teacher),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "graded"
        assert data["best_score"] == 95.0
        assert data["teacher_comment"] == "Great improvement"
        assert data["graded_at"] is not None

    def test_override_unknown_status(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        teacher: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns 422 for a status that cannot be set by hand."""
        assignment = assignment_factory()

        response = client.put(
            f"/api/assignments/{assignment.assignment_id}/progress/{student_id}/status",
            json={"status": "overdue"},
            headers=auth_headers(teacher),
        )

        assert response.status_code == 422

    def test_reset(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        teacher: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Resets a blocked record to a clean slate."""
        assignment = assignment_factory(attempts_allowed=2)
        progress_factory(assignment, stored_status=ProgressStatus.Blocked, attempt_count=2)

        response = client.post(
            f"/api/assignments/{assignment.assignment_id}/progress/{student_id}/reset",
            headers=auth_headers(teacher),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "assigned"
        assert response.json()["attempt_count"] == 0
        assert response.json()["attempts_remaining"] == 2

    def test_attempt_history(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        standard_result_factory: t.Callable[..., StandardResult],
        teacher: Actor,
        student_id: UserID,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns the student's recorded results."""
        assignment = assignment_factory()
        progress_factory(assignment, stored_status=ProgressStatus.Submitted)
        result = standard_result_factory(assignment, score=6, total=8)

        response = client.get(
            f"/api/assignments/{assignment.assignment_id}/progress/{student_id}/attempts",
            headers=auth_headers(teacher),
        )

        assert response.status_code == 200
        data = response.json()
        assert [r["result_id"] for r in data["standard"]] == [str(result.result_id)]
        assert data["game"] == []

    def test_stats(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        teacher: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Returns the assignment's counters."""
        assignment = assignment_factory()
        progress_factory(assignment, stored_status=ProgressStatus.Graded, best_score=72.5)

        response = client.get(f"/api/assignments/{assignment.assignment_id}/stats", headers=auth_headers(teacher))

        assert response.status_code == 200
        assert response.json() == {
            "assignment_id": str(assignment.assignment_id),
            "total": 1,
            "submitted": 1,
            "overdue": 0,
            "graded": 1,
            "average_score": 72.5,
        }


class TestAssignmentLifecycle(object):
    """Tests for archiving and deleting assignments."""

    def test_archive_blocks_attempts(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        teacher: Actor,
        student: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Archiving stops new attempts with reason archived; unarchiving restores them."""
        assignment = assignment_factory()
        base = f"/api/assignments/{assignment.assignment_id}"

        archived = client.post(f"{base}/archive", headers=auth_headers(teacher))
        assert archived.status_code == 200
        assert archived.json()["archival_state"] == "archived"

        refused = client.post(f"{base}/progress/start", headers=auth_headers(student))
        assert refused.status_code == 409
        assert refused.json()["reason"] == "archived"

        client.post(f"{base}/unarchive", headers=auth_headers(teacher))
        assert client.post(f"{base}/progress/start", headers=auth_headers(student)).status_code == 200

    def test_delete(
        self,
        client: TestClient,
        assignment_factory: t.Callable[..., Assignment],
        progress_factory: t.Callable[..., ProgressRecord],
        standard_result_factory: t.Callable[..., StandardResult],
        teacher: Actor,
        auth_headers: AuthHeaders,
    ) -> None:
        """Deletes the assignment with its dependents; a second delete is 404."""
        assignment = assignment_factory()
        progress_factory(assignment)
        standard_result_factory(assignment)

        response = client.delete(f"/api/assignments/{assignment.assignment_id}", headers=auth_headers(teacher))

        assert response.status_code == 200
        assert response.json() == {
            "assignment_id": str(assignment.assignment_id),
            "progress_deleted": 1,
            "standard_results_deleted": 1,
            "game_results_deleted": 0,
        }
        again = client.delete(f"/api/assignments/{assignment.assignment_id}", headers=auth_headers(teacher))
        assert again.status_code == 404
