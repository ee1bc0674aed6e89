import pytest

from sipp.runtime import telemetry
from sipp.runtime.telemetry import LogSettings


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SIPP_LOG_LEVEL", "warning")
    monkeypatch.setenv("SIPP_LOG_JSON", "yes")
    monkeypatch.setenv("SIPP_LOG_PROFILE", "0")
    monkeypatch.delenv("SIPP_LOG_CONSOLE", raising=False)
    monkeypatch.delenv("SIPP_LOG_FILE", raising=False)

    settings = LogSettings.from_env()

    assert settings.level == "WARNING"
    assert settings.json is True
    assert settings.profiling is False
    assert settings.console is False
    assert settings.file is None


def test_presets(monkeypatch) -> None:
    monkeypatch.delenv("SIPP_LOG_FILE", raising=False)

    development = LogSettings.preset("Development")
    production = LogSettings.preset("production")

    assert (development.level, development.console) == ("DEBUG", True)
    assert production.json and production.buffered
    assert production.file == "sipp.log"
    with pytest.raises(ValueError):
        LogSettings.preset("staging")


def test_configure_rejects_more_than_one_source() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="development", settings=LogSettings())


def test_span_reraises_and_keeps_metadata() -> None:
    telemetry.configure(settings=LogSettings())

    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("test::span", metadata={"count": 3}) as handle:
            assert handle.metadata == {"count": "3"}
            raise RuntimeError("boom")

    telemetry.record_event("test.done", data={"ids": [1, 2]})
