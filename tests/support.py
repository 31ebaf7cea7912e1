"""Shared test scaffolding: throwaway SQLite schema per test and an API client bound to it."""

import unittest
from collections.abc import Generator
from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from crisisconnect.core.database import get_db
from crisisconnect.core.security import create_access_token, hash_password
from crisisconnect.main import app
from crisisconnect.models import Base, Report, User

PASSWORD = "correct-horse-battery"
# Hashed once; bcrypt at full cost per user would dominate the suite's runtime.
PASSWORD_HASH = hash_password(PASSWORD)


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory schema for every test; self.db is a session on it."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False
        )
        self.db: Session = self.session_factory()
        self._user_seq = 0

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def add_user(
        self,
        name: str = "Alice",
        email: str | None = None,
        role: str = "user",
    ) -> User:
        self._user_seq += 1
        user = User(
            name=name,
            email=email or f"user{self._user_seq}@example.org",
            password_hash=PASSWORD_HASH,
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def add_report(
        self,
        user_id: int,
        title: str = "Flooded underpass",
        status: str = "Pending",
        created_at: datetime | None = None,
    ) -> Report:
        report = Report(
            title=title,
            description="Water above the curb on Main St.",
            status=status,
            user_id=user_id,
        )
        if created_at is not None:
            report.created_at = created_at
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)
        return report


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db dependency uses the test schema."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    @staticmethod
    def auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(sub=user.id, role=user.role)
        return {"Authorization": f"Bearer {token}"}
