from .base import InternalJobSource
from .adzuna import AdzunaSource
from .demo import DemoSource
from .external import ExternalJobsClient

from jobboard.log import get_logger

log = get_logger(__name__)

__all__ = [
    "InternalJobSource", "AdzunaSource", "DemoSource", "ExternalJobsClient",
    "get_internal_source",
]


def get_internal_source(settings: dict, env_getter) -> InternalJobSource:
    app_id = env_getter("ADZUNA_APP_ID")
    app_key = env_getter("ADZUNA_APP_KEY")
    if app_id and app_key:
        adzuna = settings.get("adzuna", {})
        log.info("Registered internal source: Adzuna")
        return AdzunaSource(
            app_id,
            app_key,
            country=adzuna.get("country", "us"),
            search=adzuna.get("search", "developer"),
            location=adzuna.get("location", "New York"),
            results_per_page=int(adzuna.get("results_per_page", 10)),
            total_pages=int(adzuna.get("total_pages", 5)),
            timeout=settings.get("request_timeout", 15),
        )

    log.info("No Adzuna keys found, using DemoSource")
    return DemoSource()
