"""Rendering and action helpers for the Streamlit pages."""
from __future__ import annotations

import html
from typing import Any, Callable

from jobboard.aggregator import job_type_display
from jobboard.errors import JobBoardError
from jobboard.log import get_logger
from jobboard.models import CombinedJob
from jobboard.notifications import NotificationService

log = get_logger(__name__)


def job_card_html(row: CombinedJob) -> str:
    """Job card markup; listing fields are escaped, they come from third parties."""
    title, company, location, job_type, salary, source = (
        html.escape(str(value))
        for value in (
            row.title,
            row.company,
            row.location,
            job_type_display(row.type),
            row.salary or "Not specified",
            row.source,
        )
    )
    badge = "badge-external" if row.is_external else "badge-internal"
    return (
        f'<div class="job-card"><strong>{title}</strong> · {company}<br>'
        f'{location} · {job_type} · {salary} '
        f'<span class="{badge}">{source}</span></div>'
    )


def run_action(notifier: NotificationService, failure_title: str, action: Callable[..., Any], *args, **kwargs) -> Any:
    """Call a tracker mutation from a page; failures become an error toast.

    Returns the action's result, or None when it failed.
    """
    try:
        return action(*args, **kwargs)
    except (JobBoardError, OSError) as exc:
        log.warning("%s: %s", failure_title, exc)
        notifier.error(failure_title, str(exc))
        return None
