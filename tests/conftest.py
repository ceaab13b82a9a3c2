"""
Shared fixtures: in-memory SQLite database, a user and a resume to version.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.models.user import User
from app.db.models.resume import Resume
import app.db.models  # noqa: F401 - register every model before create_all


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


RESUME_CONTENT = {
    "personal_info": {"name": "Ada Lovelace", "email": "ada@example.com"},
    "experience": [{"company": "Analytical Engines Ltd", "title": "Engineer"}],
    "education": [{"school": "University of London"}],
    "skills": ["python", "sql"],
}


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def test_user(db):
    """Create a test user."""
    user = User(full_name="Test User", email="test@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db):
    """Create a second user who must not see the first user's resumes."""
    user = User(full_name="Other User", email="other@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def resume(db, test_user):
    """Create a resume owned by test_user."""
    resume = Resume(
        user_id=test_user.id,
        title="Software Engineer Resume",
        template_id="modern",
        content=dict(RESUME_CONTENT),
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


@pytest.fixture
def edit_resume(db):
    """Return a helper that simulates a normal user edit of the resume content."""
    def _edit(resume, template_id=None, **changes):
        content = dict(resume.content)
        content.update(changes)
        resume.content = content
        if template_id:
            resume.template_id = template_id
        db.commit()
        db.refresh(resume)
        return resume
    return _edit


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """TestClient bound to the in-memory test database."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.db.session import get_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
