"""
Unit tests for settings loading.
"""

import pytest

from jobboard.config import DEFAULTS, load_settings

ENV_KEYS = ("JOBBOARD_BACKEND_URL", "JOBBOARD_CONTACT_URL", "EXTERNAL_API_URL", "REQUEST_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml")

        assert settings["external_api_url"] == DEFAULTS["external_api_url"]
        assert settings["request_timeout"] == 15.0
        assert settings["adzuna"]["total_pages"] == 5

    def test_file_merges_over_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("page_size: 25\nadzuna:\n  country: gb\n", encoding="utf-8")

        settings = load_settings(path)

        assert settings["page_size"] == 25
        assert settings["adzuna"]["country"] == "gb"
        assert settings["adzuna"]["search"] == "developer"
        assert DEFAULTS["adzuna"]["country"] == "us"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("backend_url: http://file/api\n", encoding="utf-8")
        monkeypatch.setenv("JOBBOARD_BACKEND_URL", "http://env/api")
        monkeypatch.setenv("REQUEST_TIMEOUT", "30")

        settings = load_settings(path)

        assert settings["backend_url"] == "http://env/api"
        assert settings["request_timeout"] == 30.0

    def test_bad_timeout_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT", "soon")

        settings = load_settings(tmp_path / "missing.yaml")

        assert settings["request_timeout"] == 15.0
