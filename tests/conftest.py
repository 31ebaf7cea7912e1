"""Pin settings before crisisconnect is imported: in-memory SQLite, fixed secret, temp upload dir."""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-only-secret-key-for-crisisconnect-suite"
os.environ["STATS_TIMEZONE"] = "UTC"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="crisisconnect-uploads-")
os.environ.setdefault("APP_ENV", "dev")
