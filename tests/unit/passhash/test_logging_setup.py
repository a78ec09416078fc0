"""Unit tests for structlog setup and redaction."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from mp_passhash.hasher import hash_password
from mp_passhash.observability import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    configure_logging,
    get_logger,
)
from mp_passhash.preferences import HMACPreferences


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_defaults_cover_hash_material(self) -> None:
        assert {"password", "salt", "digest", "encoded_hash"} <= DEFAULT_SENSITIVE_FIELDS

    def test_redacts_top_level(self) -> None:
        out = SensitiveFieldsFilter().redact({"password": "hunter2", "algorithm": "HMAC"})
        assert out == {"password": "[REDACTED]", "algorithm": "HMAC"}

    def test_case_insensitive(self) -> None:
        assert SensitiveFieldsFilter().redact({"Password": "x"}) == {"Password": "[REDACTED]"}

    def test_nested(self) -> None:
        out = SensitiveFieldsFilter().redact({"user": {"name": "ada", "password_hash": "$6$..."}})
        assert out == {"user": {"name": "ada", "password_hash": "[REDACTED]"}}

    def test_custom_fields(self) -> None:
        f = SensitiveFieldsFilter(frozenset({"pin"}))
        assert f.redact({"pin": "1234", "password": "x"}) == {"pin": "[REDACTED]", "password": "x"}

    def test_processor_signature(self) -> None:
        out = SensitiveFieldsFilter()(None, "info", {"event": "login", "secret": "s"})
        assert out == {"event": "login", "secret": "[REDACTED]"}


# ---------------------------------------------------------------------------
# configure_logging / get_logger
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def test_unconfigured_library_is_silent(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        structlog.reset_defaults()
        hash_password("pw", HMACPreferences(salt_length=8))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_json_output_redacted(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(logging.INFO)
        get_logger("auth").info("login_attempt", user="ada", password="hunter2")
        (record,) = _json_lines(capsys.readouterr().err)
        assert record["event"] == "login_attempt"
        assert record["user"] == "ada"
        assert record["password"] == "[REDACTED]"
        assert record["level"] == "info"
        assert record["logger"] == "auth"

    def test_initial_values_bound(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(logging.INFO)
        get_logger("auth", tenant="t1").warning("locked_out")
        (record,) = _json_lines(capsys.readouterr().err)
        assert record["tenant"] == "t1"

    def test_level_filters(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(logging.WARNING)
        get_logger("auth").info("ignored")
        assert capsys.readouterr().err == ""

    def test_console_renderer(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(logging.INFO, json=False)
        get_logger("auth").info("login_attempt", password="hunter2")
        err = capsys.readouterr().err
        assert "login_attempt" in err
        assert "hunter2" not in err

    def test_hashing_never_logs_the_password(self, restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(logging.DEBUG)
        encoded = hash_password("hunter2-very-secret", HMACPreferences(salt_length=8))
        err = capsys.readouterr().err
        assert "hunter2-very-secret" not in err
        assert encoded not in err
