#!/usr/bin/env python3
"""Load the jobs dashboard once and log what it holds."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobboard.aggregator import job_type_display
from jobboard.board import build_board
from jobboard.log import get_logger

log = get_logger(__name__)


def main(search: str | None = None, show: int = 10) -> int:
    board = build_board()
    try:
        board.dashboard.load()
        result = board.fetcher.search_jobs(search) if search else board.fetcher.refresh()
        if not result.success:
            log.warning("External jobs unavailable: %s", result.message)

        counts = board.dashboard.counts()
        log.info("Dashboard loaded.")
        log.info("  All jobs: %d", counts["all"])
        log.info("  Internal: %d", counts["internal"])
        log.info("  External: %d (of %d, more=%s)",
                 counts["external"], board.fetcher.total_count, board.fetcher.has_more)
        for job in board.dashboard.combined[:show]:
            log.info("  [%s] %s @ %s — %s, %s", job.source, job.title, job.company,
                     job.location, job_type_display(job.type))
    finally:
        board.close()
    return 0


if __name__ == "__main__":
    sys.exit(main(" ".join(sys.argv[1:]) or None))
