"""Streamlit UI for the Opportuna job board."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobboard.aggregator import SOURCE_FILTERS
from jobboard.board import JobBoard, build_board
from jobboard.errors import JobBoardError
from jobboard.log import get_logger
from jobboard.models import ApplicationStatus, CombinedJob, ExternalJob, IdentityUser, Job
from jobboard.ui import job_card_html, run_action

log = get_logger(__name__)

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #eef2ff 0%, #f8fafc 50%, #ecfdf5 100%);
}
.job-card {
    padding: 0.9rem 1.1rem;
    margin-bottom: 0.6rem;
    background: rgba(255,255,255,0.7);
    border: 1px solid rgba(74,144,217,0.2);
    border-radius: 12px;
}
.badge-internal { color: #15803d; font-weight: 600; }
.badge-external { color: #7e22ce; font-weight: 600; }
</style>
"""

_STATUS_ICONS = {
    "applied": "📨",
    "viewed": "👀",
    "interviewed": "🗣️",
    "accepted": "🎉",
    "rejected": "✖️",
}

# ── Helpers ──────────────────────────────────────────────────────────────


def _board() -> JobBoard:
    if "board" not in st.session_state:
        board = build_board()
        st.session_state["toasts"] = []
        board.notifier.subscribe(lambda note: st.session_state["toasts"].append(note))
        board.dashboard.load()
        board.fetcher.refresh()
        st.session_state["board"] = board
    return st.session_state["board"]


def _drain_toasts() -> None:
    icons = {"success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️"}
    for note in st.session_state.get("toasts", []):
        text = f"**{note.title}**" + (f" — {note.message}" if note.message else "")
        st.toast(text, icon=icons.get(note.type))
    st.session_state["toasts"] = []


def _as_job(row: CombinedJob) -> Job:
    original = row.original
    if isinstance(original, ExternalJob):
        return original.to_job()
    return original


# ── Page: Jobs ───────────────────────────────────────────────────────────


def page_jobs() -> None:
    board = _board()
    st.header("All Available Jobs")
    st.write("Discover opportunities from both our platform and external job boards.")

    with st.form("search"):
        c1, c2 = st.columns([4, 1])
        term = c1.text_input("Search external jobs", value=board.fetcher.search or "")
        submitted = c2.form_submit_button("Search", use_container_width=True)
    if submitted:
        result = board.fetcher.search_jobs(term)
        if not result.success:
            board.notifier.error("Search failed", result.message)

    counts = board.dashboard.counts()
    labels = {
        "all": f"All Jobs ({counts['all']})",
        "internal": f"Internal ({counts['internal']})",
        "external": f"External ({counts['external']})",
    }
    source = st.radio("Source", SOURCE_FILTERS, format_func=labels.get, horizontal=True)

    if board.fetcher.error:
        st.warning(f"External jobs: {board.fetcher.error}")

    user = board.auth.identity_user
    for row in board.dashboard.filtered(source):
        st.markdown(job_card_html(row), unsafe_allow_html=True)
        c1, c2 = st.columns(2)
        job = _as_job(row)
        if c1.button("Mark as applied", key=f"apply_{row.id}", disabled=user is None):
            run_action(board.notifier, "Could not track application",
                       board.tracker.apply_to_job, job, external_url=job.apply_link or None)
            st.rerun()
        if row.is_external:
            ext_id = row.original.id
            if board.saved_jobs.is_saved(ext_id):
                entry = board.saved_jobs.saved_entry(ext_id)
                if c2.button("Unsave", key=f"unsave_{row.id}"):
                    board.saved_jobs.remove(entry.id)
                    st.rerun()
            elif c2.button("Save", key=f"save_{row.id}"):
                board.saved_jobs.save(ext_id)
                st.rerun()

    if board.fetcher.has_more and st.button("Load more", use_container_width=True):
        board.fetcher.load_more()
        st.rerun()


# ── Page: Applied jobs ───────────────────────────────────────────────────


def page_applied() -> None:
    board = _board()
    st.header("My Applications")

    if board.auth.identity_user is None:
        st.info("Sign in on the **Account** page to track your applications.")
        return

    if board.tracker.error:
        st.warning(board.tracker.error)

    counts = board.tracker.status_counts()
    cols = st.columns(len(counts))
    for col, (status, n) in zip(cols, counts.items()):
        col.metric(f"{_STATUS_ICONS[status]} {status.capitalize()}", n)

    with st.expander("Add an application made elsewhere"):
        with st.form("external_application"):
            title = st.text_input("Job title")
            company = st.text_input("Company")
            location = st.text_input("Location", value="Remote")
            url = st.text_input("Application URL")
            notes = st.text_area("Notes")
            if st.form_submit_button("Add application", type="primary"):
                if not title or not company or not url:
                    st.error("Title, company and URL are required.")
                else:
                    job = Job(id=f"manual_{title}_{company}", title=title, company=company,
                              location=location, apply_link=url, source="manual")
                    run_action(board.notifier, "Could not add application",
                               board.tracker.add_external_application, job, url, notes or None)
                    st.rerun()

    if not board.tracker.applied_jobs:
        st.info("No applications tracked yet.")
        return

    df = pd.DataFrame([
        {
            "title": a.job.title,
            "company": a.job.company,
            "status": a.application_status.value,
            "applied_at": a.applied_at,
            "url": a.external_url or a.job.apply_link,
        }
        for a in board.tracker.applied_jobs
    ])
    st.dataframe(
        df,
        use_container_width=True,
        column_config={"url": st.column_config.LinkColumn("Link")},
        hide_index=True,
    )

    st.subheader("Update")
    statuses = [s.value for s in ApplicationStatus]
    for a in list(board.tracker.applied_jobs):
        c1, c2, c3 = st.columns([3, 2, 1])
        c1.markdown(f"**{a.job.title}** · {a.job.company}")
        chosen = c2.selectbox(
            "Status", statuses, index=statuses.index(a.application_status.value),
            key=f"status_{a.id}", label_visibility="collapsed",
        )
        if chosen != a.application_status.value:
            run_action(board.notifier, "Could not update status", board.tracker.update_application_status, a.id, chosen)
            st.rerun()
        if c3.button("Remove", key=f"remove_{a.id}"):
            run_action(board.notifier, "Could not remove application", board.tracker.remove_application, a.id)
            st.rerun()


# ── Page: Saved jobs ─────────────────────────────────────────────────────


def page_saved() -> None:
    board = _board()
    st.header("Saved Jobs")

    if not board.external.is_authenticated():
        with st.form("external_login"):
            st.write("Log in to the external job board to save jobs.")
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Log in", type="primary"):
                result = board.external.login(email, password)
                if result.success:
                    board.saved_jobs.refresh()
                    board.notifier.success(result.message)
                else:
                    board.notifier.error("External login failed", result.message)
                st.rerun()
        return

    if st.button("Refresh"):
        board.saved_jobs.refresh()
    if board.saved_jobs.error:
        st.warning(board.saved_jobs.error)
    if not board.saved_jobs.saved_jobs:
        st.info("No saved jobs yet.")
    for saved in board.saved_jobs.saved_jobs:
        c1, c2 = st.columns([4, 1])
        c1.markdown(f"**{saved.job_title}** · saved {saved.saved_at or ''}")
        if c2.button("Remove", key=f"saved_{saved.id}"):
            board.saved_jobs.remove(saved.id)
            st.rerun()

    if st.button("Log out of external board"):
        board.external.logout()
        board.saved_jobs.saved_jobs.clear()
        st.rerun()


# ── Page: Contact ────────────────────────────────────────────────────────


def page_contact() -> None:
    board = _board()
    st.header("Contact Us")
    with st.form("contact"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        subject = st.text_input("Subject")
        message = st.text_area("Message")
        if st.form_submit_button("Send", type="primary"):
            try:
                result = board.contacts.submit(name, email, subject, message)
            except JobBoardError as exc:
                st.error(str(exc))
            else:
                if result.success:
                    st.success(result.message)
                else:
                    st.error(result.message or "Failed to send message. Please try again.")


# ── Page: Account ────────────────────────────────────────────────────────


def page_account() -> None:
    board = _board()
    st.header("Account")

    user = board.auth.identity_user
    backend_user = board.auth.backend_user
    c1, c2 = st.columns(2)
    c1.metric("Identity session", user.email if user else "Signed out")
    c2.metric("Backend session", backend_user.email if backend_user else "Signed out")

    if user is None:
        with st.form("google_sign_in"):
            st.write("Sign in with your Google profile.")
            display_name = st.text_input("Name")
            email = st.text_input("Email")
            if st.form_submit_button("Sign in", type="primary"):
                try:
                    outcome = board.auth.sign_in_with_google(
                        IdentityUser(uid=email.strip().lower(), email=email.strip(), display_name=display_name)
                    )
                except (JobBoardError, ValueError) as exc:
                    st.error(str(exc))
                else:
                    if not outcome.backend.success:
                        board.notifier.warning("Signed in, backend unavailable", outcome.backend.message)
                    st.rerun()
    else:
        if st.button("Sign out", use_container_width=True):
            result = board.auth.sign_out()
            board.notifier.info(result.message or "Signed out")
            st.rerun()


def _wrap(page):
    def run() -> None:
        st.markdown(_CSS, unsafe_allow_html=True)
        page()
        _drain_toasts()

    run.__name__ = page.__name__
    return run


pages = [
    st.Page(_wrap(page_jobs), title="Jobs", icon="💼", url_path="jobs", default=True),
    st.Page(_wrap(page_applied), title="Applied", icon="📨", url_path="applied"),
    st.Page(_wrap(page_saved), title="Saved", icon="🔖", url_path="saved"),
    st.Page(_wrap(page_contact), title="Contact", icon="✉️", url_path="contact"),
    st.Page(_wrap(page_account), title="Account", icon="👤", url_path="account"),
]

nav = st.navigation(pages)
nav.run()
