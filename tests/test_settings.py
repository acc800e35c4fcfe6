"""Tests for environment-driven settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from results_uploader.core.settings import DEFAULT_API_BASE_URL, UploadSettings

_KEYS = [
    "CODACY_API_BASE_URL",
    "CODACY_PROJECT_TOKEN",
    "CODACY_API_TOKEN",
    "CODACY_USERNAME",
    "CODACY_PROJECT_NAME",
    "CODACY_COMMIT_UUID",
    "RESULTS_UPLOADER_BATCH_SIZE",
    "RESULTS_UPLOADER_REQUEST_TIMEOUT",
    "RESULTS_UPLOADER_TIMEOUT",
    "RESULTS_UPLOADER_TOOL_UUIDS",
]


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=False):
        for key in _KEYS:
            os.environ.pop(key, None)
        yield


class TestUploadSettings:
    def test_defaults(self, clean_env):
        settings = UploadSettings.from_env()
        assert settings == UploadSettings()
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.batch_size is None
        assert settings.upload_timeout == 600.0

    def test_reads_env(self, clean_env):
        env = {
            "CODACY_API_BASE_URL": "https://codacy.internal/",
            "CODACY_PROJECT_TOKEN": "p",
            "CODACY_COMMIT_UUID": "abc",
            "RESULTS_UPLOADER_BATCH_SIZE": "50",
            "RESULTS_UPLOADER_REQUEST_TIMEOUT": "5",
            "RESULTS_UPLOADER_TIMEOUT": "120.5",
        }
        with patch.dict(os.environ, env):
            settings = UploadSettings.from_env()
        assert settings.api_base_url == "https://codacy.internal"
        assert settings.project_token == "p"
        assert settings.commit_uuid == "abc"
        assert settings.batch_size == 50
        assert settings.request_timeout == 5.0
        assert settings.upload_timeout == 120.5

    def test_blank_values_are_unset(self, clean_env):
        with patch.dict(os.environ, {"CODACY_PROJECT_TOKEN": "  ", "RESULTS_UPLOADER_BATCH_SIZE": ""}):
            settings = UploadSettings.from_env()
        assert settings.project_token is None
        assert settings.batch_size is None

    def test_malformed_batch_size(self, clean_env):
        with patch.dict(os.environ, {"RESULTS_UPLOADER_BATCH_SIZE": "ten"}):
            with pytest.raises(ValueError, match="RESULTS_UPLOADER_BATCH_SIZE"):
                UploadSettings.from_env()

    def test_malformed_timeout(self, clean_env):
        with patch.dict(os.environ, {"RESULTS_UPLOADER_TIMEOUT": "soon"}):
            with pytest.raises(ValueError, match="RESULTS_UPLOADER_TIMEOUT"):
                UploadSettings.from_env()

    def test_api_credentials_need_all_three(self):
        assert not UploadSettings(api_token="a", username="u").has_api_credentials
        assert UploadSettings(api_token="a", username="u", project_name="p").has_api_credentials

    def test_tool_uuids(self, clean_env):
        with patch.dict(os.environ, {"RESULTS_UPLOADER_TOOL_UUIDS": " pylint=p-uuid , jshint=j-uuid,"}):
            settings = UploadSettings.from_env()
        assert settings.tool_uuids == {"pylint": "p-uuid", "jshint": "j-uuid"}

    @pytest.mark.parametrize("raw", ["pylint", "=p-uuid", "pylint="])
    def test_malformed_tool_uuids(self, clean_env, raw):
        with patch.dict(os.environ, {"RESULTS_UPLOADER_TOOL_UUIDS": raw}):
            with pytest.raises(ValueError, match="RESULTS_UPLOADER_TOOL_UUIDS"):
                UploadSettings.from_env()
