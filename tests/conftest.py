import os
import tempfile
from datetime import date

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="school-logs-")

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.subject import Subject
from app.repositories.teacher_repo import TeacherRepository


ADA = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "employeeNum": "E100",
    "hireDate": "2020-01-01",
    "salary": "50000",
}


@pytest.fixture(autouse=True)
def _fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db):
    return TeacherRepository(db)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def ada(repo):
    result = repo.insert(ADA)
    assert result.ok
    return result.value


@pytest.fixture
def add_class(db):
    def _add(instructor_id, code="HTTP5101", name="Web Application Development", start=date(2024, 9, 4)):
        s = Subject(
            subject_code=code,
            subject_name=name,
            instructor_id=instructor_id,
            start_date=start,
            end_date=date(2024, 12, 14),
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        return s

    return _add
