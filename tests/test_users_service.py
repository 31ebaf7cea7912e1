"""Unit tests for crisisconnect.services.users and crisisconnect.services.avatars."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from crisisconnect.models import Report, User
from crisisconnect.services.avatars import AvatarValidationError, store_avatar, validate_avatar
from crisisconnect.services.users import (
    AdminDeletionError,
    EmailInUseError,
    UserNotFoundError,
    delete_user_cascade,
    update_profile,
)
from tests.support import DatabaseTestCase


class TestDeleteUserCascade(DatabaseTestCase):
    def test_returns_number_of_reports_removed(self) -> None:
        user = self.add_user()
        self.add_report(user.id)
        self.add_report(user.id)
        self.assertEqual(delete_user_cascade(self.db, user.id), 2)
        self.assertEqual(self.db.query(User).count(), 0)
        self.assertEqual(self.db.query(Report).count(), 0)

    def test_admin_refused_and_reports_untouched(self) -> None:
        admin = self.add_user(role="admin")
        self.add_report(admin.id)
        with self.assertRaises(AdminDeletionError):
            delete_user_cascade(self.db, admin.id)
        self.assertEqual(self.db.query(Report).count(), 1)

    def test_missing_user(self) -> None:
        with self.assertRaises(UserNotFoundError):
            delete_user_cascade(self.db, 12345)


class TestUpdateProfile(DatabaseTestCase):
    def test_none_leaves_fields_unchanged(self) -> None:
        user = self.add_user(name="Keep", email="keep@example.org")
        updated = update_profile(self.db, user.id)
        self.assertEqual((updated.name, updated.email), ("Keep", "keep@example.org"))

    def test_same_email_is_not_a_conflict(self) -> None:
        user = self.add_user(email="me@example.org")
        updated = update_profile(self.db, user.id, name="Renamed", email="me@example.org")
        self.assertEqual(updated.name, "Renamed")

    def test_conflicting_email(self) -> None:
        self.add_user(email="taken@example.org")
        user = self.add_user()
        with self.assertRaises(EmailInUseError):
            update_profile(self.db, user.id, email="taken@example.org")

    def test_unique_index_conflict_rolls_back(self) -> None:
        self.add_user(email="taken@example.org")
        user = self.add_user(name="Before", email="mine@example.org")
        user_id = user.id
        with patch("crisisconnect.services.users.email_taken", return_value=False):
            with self.assertRaises(EmailInUseError):
                update_profile(self.db, user_id, name="After", email="taken@example.org")
        stored = self.db.get(User, user_id)
        self.assertEqual((stored.name, stored.email), ("Before", "mine@example.org"))


class TestAvatarValidation(unittest.TestCase):
    def _settings(self, upload_dir: str = "uploads", max_bytes: int = 1024) -> MagicMock:
        settings = MagicMock()
        settings.UPLOAD_DIR = upload_dir
        settings.AVATAR_MAX_BYTES = max_bytes
        return settings

    def test_allowed_types_map_to_extensions(self) -> None:
        settings = self._settings()
        self.assertEqual(validate_avatar("image/jpeg", 10, settings), ".jpg")
        self.assertEqual(validate_avatar("image/PNG", 10, settings), ".png")
        self.assertEqual(validate_avatar("image/webp; q=1", 10, settings), ".webp")

    def test_rejects_other_types(self) -> None:
        with self.assertRaises(AvatarValidationError):
            validate_avatar("image/gif", 10, self._settings())
        with self.assertRaises(AvatarValidationError):
            validate_avatar(None, 10, self._settings())

    def test_rejects_empty_and_oversized(self) -> None:
        with self.assertRaises(AvatarValidationError):
            validate_avatar("image/png", 0, self._settings())
        with self.assertRaises(AvatarValidationError):
            validate_avatar("image/png", 1025, self._settings(max_bytes=1024))

    def test_store_writes_file_under_avatars(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            url = store_avatar(b"jpegdata", "image/jpeg", self._settings(upload_dir=tmp))
            name = url.rsplit("/", 1)[1]
            self.assertTrue(url.startswith("/uploads/avatars/"))
            self.assertEqual((Path(tmp) / "avatars" / name).read_bytes(), b"jpegdata")


if __name__ == "__main__":
    unittest.main()
