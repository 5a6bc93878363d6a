"""
Tests for settings and logging setup
"""

import logging
import sys

import pytest

from gcloud_docs_mcp.config import DEFAULT_USER_AGENT, Settings, get_settings
from gcloud_docs_mcp.exceptions import ConfigurationError
from gcloud_docs_mcp.utils.logging import get_logger, setup_logging

ENV_VARS = (
    "GCLOUD_DOCS_BASE_URL",
    "GCLOUD_DOCS_PAGE_TIMEOUT",
    "GCLOUD_DOCS_SEARCH_TIMEOUT",
    "GCLOUD_DOCS_MAX_CONTENT_CHARS",
    "GCLOUD_DOCS_WEB_SEARCH",
    "GCLOUD_DOCS_SITE_SEARCH",
    "GCLOUD_DOCS_USER_AGENT",
)


def test_settings_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.docs_base_url == "https://cloud.google.com"
    assert settings.docs_domain == "cloud.google.com"
    assert settings.page_timeout == 30
    assert settings.search_timeout == 15
    assert settings.max_content_chars == 20000
    assert settings.fetch_top_k == 3
    assert settings.related_docs_count == 3
    assert settings.web_search_enabled is True
    assert settings.site_search_enabled is True
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GCLOUD_DOCS_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("GCLOUD_DOCS_PAGE_TIMEOUT", "2.5")
    monkeypatch.setenv("GCLOUD_DOCS_MAX_CONTENT_CHARS", "500")
    monkeypatch.setenv("GCLOUD_DOCS_WEB_SEARCH", "false")
    monkeypatch.setenv("GCLOUD_DOCS_SITE_SEARCH", "0")

    settings = Settings()

    assert settings.docs_base_url == "http://localhost:8080"
    assert settings.docs_domain == "localhost:8080"
    assert settings.page_timeout == 2.5
    assert settings.max_content_chars == 500
    assert settings.web_search_enabled is False
    assert settings.site_search_enabled is False


@pytest.mark.parametrize(
    "variable,value",
    [
        ("GCLOUD_DOCS_PAGE_TIMEOUT", "thirty"),
        ("GCLOUD_DOCS_SEARCH_TIMEOUT", "-1"),
        ("GCLOUD_DOCS_MAX_CONTENT_CHARS", "20k"),
        ("GCLOUD_DOCS_MAX_CONTENT_CHARS", "0"),
    ],
)
def test_malformed_environment_value_names_the_variable(monkeypatch, variable, value):
    monkeypatch.setenv(variable, value)

    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()

    assert exc_info.value.variable == variable
    assert variable in str(exc_info.value)
    assert repr(value) in str(exc_info.value)


def test_doc_url():
    settings = Settings(docs_base_url="https://cloud.google.com")

    assert settings.doc_url("run/docs") == "https://cloud.google.com/run/docs"


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("gcloud_docs_mcp").setLevel(logging.NOTSET)
    logging.getLogger("httpx").setLevel(logging.NOTSET)


def test_setup_logging_stdio_mode_uses_stderr(restore_logging):
    setup_logging(level="DEBUG", disable_stdio_logging=True)

    handler = logging.getLogger().handlers[0]
    assert handler.stream is sys.stderr
    assert logging.getLogger("gcloud_docs_mcp").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_get_logger_prefixes_package_name():
    assert get_logger("custom").name == "gcloud_docs_mcp.custom"
    assert get_logger("gcloud_docs_mcp.docs").name == "gcloud_docs_mcp.docs"
