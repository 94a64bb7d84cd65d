"""
Unit tests for the internal job sources.
"""

import requests

from conftest import make_response
from jobboard.sources import AdzunaSource, DemoSource, get_internal_source
from jobboard.sources.demo import DEMO_JOBS


def _adzuna_hit(i, **extra):
    hit = {
        "id": f"az-{i}",
        "title": f"Engineer {i}",
        "company": {"display_name": "Globex"},
        "location": {"display_name": "Brooklyn, NY"},
        "contract_time": "full_time",
        "category": {"label": "IT Jobs"},
        "description": "Ship things.",
        "redirect_url": f"https://adzuna.example/{i}",
        "salary_min": 90000,
        "salary_max": 110000,
        "created": "2024-05-01T00:00:00Z",
    }
    hit.update(extra)
    return hit


def _source(session, pages=3):
    return AdzunaSource("id", "key", total_pages=pages, results_per_page=2, timeout=4, session=session)


class TestAdzunaSource:
    def test_walks_every_page(self, session):
        session.get.side_effect = [
            make_response(200, {"results": [_adzuna_hit(1), _adzuna_hit(2)]}),
            make_response(200, {"results": [_adzuna_hit(3)]}),
            make_response(200, {"results": []}),
        ]

        jobs = _source(session).fetch()

        assert [j.id for j in jobs] == ["az-1", "az-2", "az-3"]
        urls = [c.args[0] for c in session.get.call_args_list]
        assert urls == [f"https://api.adzuna.com/v1/api/jobs/us/search/{p}" for p in (1, 2, 3)]
        params = session.get.call_args_list[0].kwargs["params"]
        assert params["what"] == "developer"
        assert params["results_per_page"] == 2
        assert session.get.call_args_list[0].kwargs["timeout"] == 4

    def test_field_mapping(self, session):
        session.get.return_value = make_response(200, {"results": [_adzuna_hit(1)]})

        (job,) = _source(session, pages=1).fetch()

        assert job.company == "Globex"
        assert job.location == "Brooklyn, NY"
        assert job.salary == "$90000 - $110000"
        assert job.experience_level == "IT Jobs"
        assert job.apply_link == "https://adzuna.example/1"
        assert job.source == "internal"

    def test_missing_fields_get_defaults(self, session):
        session.get.return_value = make_response(200, {"results": [{"id": "bare"}]})

        (job,) = _source(session, pages=1).fetch()

        assert job.title == "Untitled"
        assert job.company == "Unknown Company"
        assert job.location == "Remote"
        assert job.type == "Full-time"
        assert job.salary == "Not specified"

    def test_failing_page_contributes_nothing(self, session):
        session.get.side_effect = [
            make_response(200, {"results": [_adzuna_hit(1)]}),
            make_response(500, {"error": "boom"}),
            requests.Timeout("slow"),
            make_response(200, {"unexpected": True}),
            make_response(200, {"results": [_adzuna_hit(5)]}),
        ]

        jobs = _source(session, pages=5).fetch()

        assert [j.id for j in jobs] == ["az-1", "az-5"]


class TestDemoSourceAndFactory:
    def test_demo_jobs_are_internal(self):
        jobs = DemoSource().fetch()

        assert len(jobs) == len(DEMO_JOBS)
        assert all(j.source == "internal" for j in jobs)
        assert jobs[0].id == "job-1"

    def test_demo_when_no_keys(self):
        source = get_internal_source({}, lambda key: "")

        assert isinstance(source, DemoSource)

    def test_adzuna_when_keys_present(self):
        env = {"ADZUNA_APP_ID": "id", "ADZUNA_APP_KEY": "key"}
        settings = {"adzuna": {"country": "gb", "total_pages": 2}, "request_timeout": 7.0}

        source = get_internal_source(settings, lambda key: env.get(key, ""))

        assert isinstance(source, AdzunaSource)
        assert source.base_url.endswith("/jobs/gb/search")
        assert source.total_pages == 2
        assert source.timeout == 7.0
