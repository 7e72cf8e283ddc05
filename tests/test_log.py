import io

import pytest
import structlog

from kumiki.expander import try_expand
from kumiki.log import configure_logging, resolve_level


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.mark.ci
def test_resolve_level_prefers_argument(monkeypatch):
    monkeypatch.setenv("KUMIKI_LOG_LEVEL", "ERROR")
    assert resolve_level("debug") == "DEBUG"


@pytest.mark.ci
def test_resolve_level_from_environment(monkeypatch):
    monkeypatch.setenv("KUMIKI_LOG_LEVEL", "info")
    assert resolve_level() == "INFO"


@pytest.mark.ci
def test_resolve_level_falls_back_to_warning(monkeypatch):
    monkeypatch.delenv("KUMIKI_LOG_LEVEL", raising=False)
    assert resolve_level() == "WARNING"
    assert resolve_level("chatty") == "WARNING"


@pytest.mark.ci
def test_rejected_abbreviation_is_logged(reset_structlog):
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    try_expand("div#x#y")
    output = stream.getvalue()
    assert "abbreviation_rejected" in output
    assert "kind=DUPLICATE_ID" in output
    assert "position=5" in output


@pytest.mark.ci
def test_warning_level_hides_debug_events(reset_structlog):
    stream = io.StringIO()
    configure_logging("WARNING", stream=stream)
    try_expand("ul>li*3")
    try_expand("div[")
    assert stream.getvalue() == ""
