"""Data models for jobs, applications and API envelopes."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Job:
    id: str
    title: str
    company: str
    location: str
    description: str = ""
    apply_link: str = ""
    salary: str | None = None
    type: str | None = None
    experience_level: str | None = None
    posted_at: str | None = None
    source: str = "internal"
    raw: dict = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "type": self.type,
            "experienceLevel": self.experience_level,
            "description": self.description,
            "applyLink": self.apply_link,
            "salary": self.salary,
            "postedAt": self.posted_at,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Job":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            company=data.get("company", ""),
            location=data.get("location", ""),
            description=data.get("description", ""),
            apply_link=data.get("applyLink", ""),
            salary=data.get("salary"),
            type=data.get("type"),
            experience_level=data.get("experienceLevel"),
            posted_at=data.get("postedAt"),
            source=data.get("source", "internal"),
        )


@dataclass
class ExternalJob:
    """A job as returned by the third-party job board."""
    id: int
    title: str
    company_name: str
    location: str
    description: str = ""
    salary: str | None = None
    job_type: str | None = None
    category: str | None = None
    category_name: str | None = None
    industry: str | None = None
    status: str = "OPEN"
    posted_by: str | None = None
    posted_at: str | None = None
    expires_at: str | None = None
    view_count: int = 0
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, hit: dict[str, Any]) -> "ExternalJob":
        return cls(
            id=hit.get("id"),
            title=hit.get("title", ""),
            company_name=hit.get("company_name", ""),
            location=hit.get("location", ""),
            description=hit.get("description", ""),
            salary=hit.get("salary"),
            job_type=hit.get("job_type"),
            category=hit.get("category"),
            category_name=hit.get("category_name"),
            industry=hit.get("industry"),
            status=hit.get("status", "OPEN"),
            posted_by=hit.get("posted_by"),
            posted_at=hit.get("posted_at"),
            expires_at=hit.get("expires_at"),
            view_count=hit.get("view_count") or 0,
            raw=hit,
        )

    def to_job(self) -> Job:
        # prefixed so it cannot collide with internal ids
        return Job(
            id=f"ext_{self.id}",
            title=self.title,
            company=self.company_name,
            location=self.location,
            description=self.description,
            salary=self.salary,
            type=self.job_type,
            experience_level=self.category_name,
            posted_at=self.posted_at,
            source="external",
            raw=self.raw,
        )


@dataclass
class ExternalCategory:
    id: int
    category_name: str

    @classmethod
    def from_api(cls, hit: dict[str, Any]) -> "ExternalCategory":
        return cls(id=hit.get("id"), category_name=hit.get("category_name", ""))


@dataclass
class SavedJob:
    id: int
    job: int
    job_title: str = ""
    saved_at: str | None = None

    @classmethod
    def from_api(cls, hit: dict[str, Any]) -> "SavedJob":
        return cls(
            id=hit.get("id"),
            job=hit.get("job"),
            job_title=hit.get("job_title", ""),
            saved_at=hit.get("saved_at"),
        )


@dataclass
class ExternalApplication:
    id: int
    job: int
    applicant: str = ""
    status: str = "PENDING"
    cover_letter: str = ""
    resume: str | None = None
    applied_at: str | None = None

    @classmethod
    def from_api(cls, hit: dict[str, Any]) -> "ExternalApplication":
        return cls(
            id=hit.get("id"),
            job=hit.get("job"),
            applicant=hit.get("applicant", ""),
            status=hit.get("status", "PENDING"),
            cover_letter=hit.get("cover_letter", ""),
            resume=hit.get("resume"),
            applied_at=hit.get("applied_at"),
        )


@dataclass
class Page(Generic[T]):
    """Paginated ``{count, next, previous, results}`` envelope."""
    count: int
    results: list[T]
    next: str | None = None
    previous: str | None = None

    @property
    def has_next(self) -> bool:
        return bool(self.next)


@dataclass
class Result:
    """Uniform outcome of a remote call; remote failures never raise past it."""
    success: bool
    message: str | None = None
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> "Result":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, error: str | None = None) -> "Result":
        return cls(success=False, message=message, error=error)

    @classmethod
    def from_envelope(cls, body: dict[str, Any]) -> "Result":
        return cls(
            success=bool(body.get("success")),
            message=body.get("message"),
            data=body.get("data"),
            error=body.get("error"),
        )


class ApplicationStatus(str, Enum):
    applied = "applied"
    viewed = "viewed"
    interviewed = "interviewed"
    accepted = "accepted"
    rejected = "rejected"


@dataclass
class AppliedJob:
    id: str
    job_id: str
    user_id: str
    job: Job
    applied_at: str
    application_status: ApplicationStatus = ApplicationStatus.applied
    external_url: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "jobId": self.job_id,
            "userId": self.user_id,
            "job": self.job.to_dict(),
            "appliedAt": self.applied_at,
            "applicationStatus": self.application_status.value,
        }
        if self.external_url is not None:
            data["externalUrl"] = self.external_url
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppliedJob":
        return cls(
            id=data["id"],
            job_id=str(data["jobId"]),
            user_id=str(data["userId"]),
            job=Job.from_dict(data.get("job") or {}),
            applied_at=data["appliedAt"],
            application_status=ApplicationStatus(data.get("applicationStatus", "applied")),
            external_url=data.get("externalUrl"),
            notes=data.get("notes"),
        )


@dataclass
class CombinedJob:
    """A dashboard row tagged with where the job came from."""
    id: str
    title: str
    company: str
    location: str
    source: str
    salary: str | None = None
    type: str | None = None
    original: Job | ExternalJob | None = None

    @property
    def is_external(self) -> bool:
        return self.source == "external"


@dataclass
class BackendUser:
    id: int
    name: str
    email: str
    provider: str = "local"
    avatar: str | None = None
    is_verified: bool = False
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BackendUser":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            email=data.get("email", ""),
            provider=data.get("provider", "local"),
            avatar=data.get("avatar"),
            is_verified=bool(data.get("is_verified", False)),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class IdentityUser:
    """Signed-in user as reported by the identity provider."""
    uid: str
    email: str
    display_name: str = ""
    photo_url: str | None = None


@dataclass
class Contact:
    id: int
    name: str
    email: str
    subject: str
    message: str = ""
    status: str = "unread"
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contact":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            email=data.get("email", ""),
            subject=data.get("subject", ""),
            message=data.get("message", ""),
            status=data.get("status", "unread"),
            created_at=data.get("created_at"),
        )
