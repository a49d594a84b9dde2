"""Pytest fixtures for BrainBurst integration tests.

This module provides fixtures for testing services and API endpoints against
a real database. The test environment uses a SQLite file created for the test
session; tables are created from the table metadata. Tests run within a
transaction that is rolled back after each test, ensuring isolation.

Usage:
    def test_start(db_session: Session, assignment_factory, student_id):
        assignment = assignment_factory(attempts_allowed=2)
        view = progress.start_attempt(Actor(student_id, UserRole.Student), assignment.assignment_id,
                                      session=db_session)
"""

from __future__ import annotations

import datetime
import os
import typing as t
from pathlib import Path

import jwt
import pydantic as p
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import brainburst
from brainburst import storage
from brainburst.core import BrainBurstContainer, TimestampProvider
from brainburst.model import Actor, ArchivalState, Assignment, ClassRoster, DeploymentEnvironment, GameResult, \
    ProgressRecord, ProgressStatus, StandardResult, TestID, UserID, UserRole
from brainburst.storage.table import metadata

TEST_JWT_SECRET = "test-jwt-secret-for-integration-tests"


@pytest.fixture(scope="session")
def container(tmp_path_factory: pytest.TempPathFactory) -> t.Generator[BrainBurstContainer]:
    """A container booted in the test environment, on a fresh SQLite database file."""
    ct = BrainBurstContainer()
    root = Path(os.path.dirname(brainburst.__file__)).parent
    db_path = tmp_path_factory.mktemp("db") / "brainburst.db"

    BrainBurstContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{root}/config"),
        override=(f"storage.persistent.database.database={db_path}",),
    )
    metadata.create_all(ct.storage().persistent().engine())

    yield ct

    ct.shutdown_resources()


@pytest.fixture(scope="session")
def app(container: BrainBurstContainer) -> FastAPI:
    """The API app. The test environment has no secrets.yaml, so the signing key is set here."""
    from brainburst.web.brainburst.main import _create_app  # pyright: ignore[reportPrivateUsage]

    container.secrets.override({"auth": {"jwt": p.Secret(TEST_JWT_SECRET)}})

    container.wire(
        modules=[
            "brainburst.web.brainburst.main",
            "brainburst.web.brainburst.route.assignment",
            "brainburst.web.brainburst.route.classroom",
            "brainburst.auth.middleware",
        ]
    )

    return _create_app()


@pytest.fixture
def db_session(container: BrainBurstContainer) -> t.Generator[Session]:
    """A session bound to one connection whose outer transaction is rolled back after the test.

    The services open their own units with ``session.begin()``; in
    ``create_savepoint`` mode those become savepoints inside the test's
    transaction, so nothing a test writes outlives it.
    """
    engine = container.storage().persistent().engine()

    connection = engine.connect()
    transaction = connection.begin()

    session = Session(
        bind=connection,
        autobegin=False,
        join_transaction_mode="create_savepoint",
    )

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def committed_sessions(container: BrainBurstContainer) -> t.Generator[t.Callable[[], Session]]:
    """Provide a factory of independent, committing sessions.

    For tests that need several connections to see each other's writes, such
    as concurrency tests. Every table is emptied at teardown.
    """
    engine = container.storage().persistent().engine()
    sessions: list[Session] = []

    def create_session() -> Session:
        session = Session(bind=engine, autobegin=False, expire_on_commit=False)
        sessions.append(session)
        return session

    yield create_session

    for session in sessions:
        session.close()
    with engine.begin() as connection:
        for table in reversed(metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def client(app: FastAPI, container: BrainBurstContainer, db_session: Session) -> t.Generator[TestClient]:
    """A TestClient whose requests share the test's ``db_session``."""
    container.storage().persistent().session.override(db_session)

    with TestClient(app) as test_client:
        yield test_client

    container.storage().persistent().session.reset_override()


@pytest.fixture
def utcnow() -> TimestampProvider:
    """The wall clock, for tokens and due dates relative to now."""
    return lambda: datetime.datetime.now(datetime.UTC)


@pytest.fixture
def teacher_id() -> UserID:
    return UserID()


@pytest.fixture
def student_id() -> UserID:
    return UserID()


@pytest.fixture
def teacher(teacher_id: UserID) -> Actor:
    return Actor(user_id=teacher_id, role=UserRole.Teacher)


@pytest.fixture
def student(student_id: UserID) -> Actor:
    return Actor(user_id=student_id, role=UserRole.Student)


@pytest.fixture
def classroom_factory(db_session: Session, teacher_id: UserID) -> t.Callable[..., ClassRoster]:
    """Factory fixture for creating classes with members.

    Usage:
        def test_something(classroom_factory, student_id):
            classroom = classroom_factory(student_ids=[student_id])
    """

    def create_classroom(
        name: str = "Period 3 Biology",
        teacher_id: UserID = teacher_id,
        student_ids: t.Iterable[UserID] = (),
        is_active: bool = True,
    ) -> ClassRoster:
        with db_session.begin():
            return storage.classroom.create(
                name=name,
                teacher_id=teacher_id,
                is_active=is_active,
                student_ids=student_ids,
                session=db_session,
            )

    return create_classroom


@pytest.fixture
def classroom(classroom_factory: t.Callable[..., ClassRoster], student_id: UserID) -> ClassRoster:
    """Provide a class taught by ``teacher_id`` with ``student_id`` enrolled."""
    return classroom_factory(student_ids=[student_id])


@pytest.fixture
def assignment_factory(db_session: Session, classroom: ClassRoster) -> t.Callable[..., Assignment]:
    """Factory fixture for creating assignments without seeding progress records.

    Defaults to the ``classroom`` fixture's class and teacher.
    """

    def create_assignment(
        classroom: ClassRoster = classroom,
        title: str = "Cell Structure Quiz",
        due_date: datetime.datetime | None = None,
        attempts_allowed: int | None = None,
        max_score: float = 100.0,
        archival_state: ArchivalState = ArchivalState.Active,
    ) -> Assignment:
        with db_session.begin():
            assignment = storage.assignment.create(
                class_id=classroom.class_id,
                test_id=TestID(),
                teacher_id=classroom.teacher_id,
                title=title,
                due_date=due_date,
                attempts_allowed=attempts_allowed,
                max_score=max_score,
                session=db_session,
            )
            if archival_state is not ArchivalState.Active:
                storage.assignment.update(
                    assignment.assignment_id, archival_state=archival_state, session=db_session
                )
                assignment = storage.assignment.get(assignment.assignment_id, session=db_session)
                assert assignment is not None
            return assignment

    return create_assignment


@pytest.fixture
def progress_factory(db_session: Session, student_id: UserID) -> t.Callable[..., ProgressRecord]:
    """Factory fixture for creating a progress record in any state.

    Usage:
        record = progress_factory(assignment, stored_status=ProgressStatus.Submitted, attempt_count=2)
    """

    def create_progress(
        assignment: Assignment,
        student_id: UserID = student_id,
        stored_status: ProgressStatus = ProgressStatus.Assigned,
        **fields: t.Any,
    ) -> ProgressRecord:
        with db_session.begin():
            storage.progress.create(assignment.assignment_id, student_id, session=db_session)
            if stored_status is not ProgressStatus.Assigned or fields:
                storage.progress.update(
                    assignment.assignment_id,
                    student_id,
                    expected_version=0,
                    stored_status=stored_status,
                    session=db_session,
                    **fields,
                )
            record = storage.progress.get(assignment.assignment_id, student_id, session=db_session)
            assert record is not None
            return record

    return create_progress


@pytest.fixture
def standard_result_factory(db_session: Session, student_id: UserID) -> t.Callable[..., StandardResult]:
    def create_result(
        assignment: Assignment,
        student_id: UserID = student_id,
        score: float = 8,
        total: float = 10,
    ) -> StandardResult:
        with db_session.begin():
            return storage.result.create(
                test_id=assignment.test_id,
                student_id=student_id,
                score=score,
                total=total,
                assignment_id=assignment.assignment_id,
                session=db_session,
            )

    return create_result


@pytest.fixture
def game_result_factory(db_session: Session, student_id: UserID) -> t.Callable[..., GameResult]:
    def create_result(
        assignment: Assignment,
        student_id: UserID = student_id,
        score: float = 80,
        total_questions: int = 10,
        correct_answers: int = 8,
    ) -> GameResult:
        with db_session.begin():
            return storage.game_result.create(
                test_id=assignment.test_id,
                student_id=student_id,
                score=score,
                total_questions=total_questions,
                correct_answers=correct_answers,
                assignment_id=assignment.assignment_id,
                session=db_session,
            )

    return create_result


def create_auth_token(actor: Actor, utcnow: TimestampProvider, secret: str = TEST_JWT_SECRET) -> str:
    """Mint a one-hour bearer token for ``actor``."""
    now = utcnow()
    payload = {
        "sub": str(actor.user_id),
        "role": actor.role.value,
        "exp": now + datetime.timedelta(hours=1),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def auth_headers(app: FastAPI, utcnow: TimestampProvider) -> t.Callable[[Actor], dict[str, str]]:
    """Build an Authorization header for an actor.

    Depends on app fixture to ensure the JWT secret override is in place.
    """

    def headers(actor: Actor) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_auth_token(actor, utcnow)}"}

    return headers
