"""
Shared fixtures for the job board tests.

No test touches the network: HTTP clients get a MagicMock session and
storage lives in memory or under tmp_path.
"""

import json
import os
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JOBBOARD_LOG_FILE", "0")

from jobboard.models import ExternalJob, IdentityUser, Job
from jobboard.storage import LocalAppliedJobStore, MemoryStorage
from jobboard.tracker import ApplicationTracker


def make_response(status=200, payload=None, text=None):
    """A stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if payload is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON")
        response.text = text or ""
    else:
        response.content = json.dumps(payload).encode("utf-8")
        response.json.return_value = payload
        response.text = text or json.dumps(payload)
    return response


def jobs_page(start, n, count, has_next):
    return {
        "count": count,
        "next": f"https://jobs.example/api/jobs/?page={start // n + 2}" if has_next else None,
        "previous": None,
        "results": [
            {
                "id": i,
                "title": f"Job {i}",
                "company_name": f"Company {i}",
                "location": "Remote",
                "job_type": "FT",
                "salary": "$100k",
                "status": "OPEN",
            }
            for i in range(start, start + n)
        ],
    }


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return LocalAppliedJobStore(storage)


@pytest.fixture
def user_a():
    return IdentityUser(uid="user-a", email="a@example.com", display_name="Alice")


@pytest.fixture
def user_b():
    return IdentityUser(uid="user-b", email="b@example.com", display_name="Bo")


@pytest.fixture
def job():
    return Job(id="job-1", title="Frontend Developer", company="Brightwave Labs", location="New York, NY")


@pytest.fixture
def other_job():
    return Job(id="job-2", title="Backend Engineer", company="Northwind Data", location="Remote")


@pytest.fixture
def tracker(store, user_a):
    t = ApplicationTracker(store)
    t.set_user(user_a)
    return t


@pytest.fixture
def external_job():
    return ExternalJob(id=7, title="Data Analyst", company_name="Acme", location="Berlin", job_type="CT")
