from abc import ABC, abstractmethod

from jobboard.models import Job


class InternalJobSource(ABC):
    """Source of the platform's own (internal) job listings."""

    name: str = "internal"

    @abstractmethod
    def fetch(self) -> list[Job]:
        pass
