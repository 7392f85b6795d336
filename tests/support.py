"""Shared fixtures: in-memory database, API client and seed data."""

from io import BytesIO

from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from yearbook.api.deps import get_montage_queue
from yearbook.core.database import get_db
from yearbook.main import app
from yearbook.models import Admin, Base, Batch, College, Degree, User
from yearbook.services.credentials import CredentialStore
from yearbook.services.montage_queue import MontageJob

PASSWORD = "correct-horse-battery"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingQueue:
    """MontageQueue that keeps submitted jobs instead of running them."""

    def __init__(self) -> None:
        self.jobs: list[MontageJob] = []

    def submit(self, job: MontageJob) -> str:
        self.jobs.append(job)
        return f"job-{len(self.jobs)}"


def make_client(session_factory: sessionmaker, queue: RecordingQueue | None = None) -> TestClient:
    """TestClient bound to session_factory. Each client keeps its own cookie jar (one device)."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_montage_queue] = lambda: queue or RecordingQueue()
    return TestClient(app)


def clear_overrides() -> None:
    app.dependency_overrides.clear()


def enrollment_sheet(numbers: list, header: str = "enrollmentNumber") -> bytes:
    """xlsx bytes with one header column followed by the given values."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append([header, "name"])
    for number in numbers:
        sheet.append([number, f"Student {number}"])
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def seed_admin(db: Session, email: str = "root@x.com", role: str = "superadmin") -> Admin:
    return CredentialStore(db).create_admin(name="Root", email=email, password=PASSWORD, role=role)


def seed_batch(
    db: Session,
    admin: Admin,
    enrollment_numbers: list[str] | None = None,
    batch_code: str = "BATCH_1_abc",
    college_code: str = "SXC",
) -> Batch:
    college = College(
        name=f"College {college_code}",
        code=college_code,
        created_by_id=admin.id,
        degrees=[Degree(name="BSc", code="BSC", duration=3)],
    )
    db.add(college)
    db.commit()
    batch = Batch(
        batch_year="2024",
        batch_code=batch_code,
        college_id=college.id,
        degree="BSc",
        enrollment_numbers=enrollment_numbers or ["E1", "E2", "E3"],
        created_by_id=admin.id,
    )
    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch


def seed_user(db: Session, batch: Batch, email: str, enrollment_number: str, name: str = "Student") -> User:
    return CredentialStore(db).create_user(
        name=name,
        email=email,
        password=PASSWORD,
        enrollment_number=enrollment_number,
        batch_id=batch.id,
    )
