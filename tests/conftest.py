"""Shared test fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assocvote.main import app
from assocvote.db.base import Base
from assocvote.api.deps import get_db
from assocvote.core.rate_limit import limiter
from assocvote.core.security import create_access_token
from assocvote.db.models import (
    Association,
    Event,
    EventUserEnrollment,
    Meeting,
    PollQuestionType,
    User,
    UserRole,
)
from assocvote.services.poll import NewQuestion


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests():
    """Answer-heavy tests would otherwise trip the per-IP limits."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def association(db_session):
    association = Association(name="Les Amis du Quartier")
    db_session.add(association)
    db_session.commit()
    return association


@pytest.fixture
def make_user(db_session, association):
    """Factory creating users of the test association."""
    counter = {"n": 0}

    def _make_user(role=UserRole.MEMBER):
        counter["n"] += 1
        user = User(
            email=f"user{counter['n']}@example.org",
            first_name="User",
            last_name=str(counter["n"]),
            role=role,
            association_id=association.id,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user(UserRole.ADMIN)


@pytest.fixture
def member_user(make_user):
    return make_user()


@pytest.fixture
def make_meeting(db_session, association):
    """Factory creating a meeting whose event has the given users enrolled."""
    def _make_meeting(users):
        event = Event(name="General assembly", association_id=association.id)
        db_session.add(event)
        db_session.flush()

        for user in users:
            db_session.add(EventUserEnrollment(event_id=event.id, user_id=user.id))

        meeting = Meeting(agendum="Budget", presence_code="GA2025", event_id=event.id)
        db_session.add(meeting)
        db_session.commit()
        return meeting

    return _make_meeting


@pytest.fixture
def yes_no_question():
    return NewQuestion(
        prompt="Do you approve?",
        type=PollQuestionType.SINGLE_CHOICE,
        options=["Yes", "No"],
    )


@pytest.fixture
def multiple_choice_question():
    return NewQuestion(
        prompt="Which workshops interest you?",
        type=PollQuestionType.MULTIPLE_CHOICE,
        options=["Pottery", "Gardening", "Chess"],
    )


def auth_headers(user) -> dict:
    """Bearer header for a user, as issued by the identity service."""
    token = create_access_token({
        "sub": user.id,
        "role": user.role.value,
        "association_id": user.association_id,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def member_headers(member_user):
    return auth_headers(member_user)


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def outsider_headers(db_session):
    """Admin of another association."""
    neighbour = Association(name="Club du Village Voisin")
    db_session.add(neighbour)
    db_session.flush()

    outsider = User(
        email="admin@voisin.example.org",
        first_name="Outside",
        last_name="Admin",
        role=UserRole.ADMIN,
        association_id=neighbour.id,
    )
    db_session.add(outsider)
    db_session.commit()
    return auth_headers(outsider)


@pytest.fixture
def file_session_factory(tmp_path):
    """
    Sessions on a file database, one connection each.

    The in-memory engine shares a single connection between sessions, so
    tests interleaving two transactions need this one.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'assocvote.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
