"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest

# Keep the web app's default slot directory out of the working tree
os.environ.setdefault("SRS_STORAGE_DIR", os.path.join(tempfile.gettempdir(), "srs_test_storage"))

from storage import MemorySlotStore
from student_manager import StudentManager


def make_student(name="Ann Lee", student_id="101", email="a@b.co", contact="9876543210"):
    return {"name": name, "studentId": student_id, "email": email, "contact": contact}


@pytest.fixture
def student():
    return make_student()


@pytest.fixture
def slots():
    return MemorySlotStore()


@pytest.fixture
def manager(slots):
    return StudentManager(slots)


@pytest.fixture
def client(monkeypatch, manager):
    """Flask test client backed by an in-memory student manager."""
    import apps

    monkeypatch.setattr(apps, "student_manager", manager)
    apps.app.config["TESTING"] = True
    with apps.app.test_client() as client:
        yield client
