"""Tests for structlog configuration."""

import json
import logging

import pytest
import structlog

from bignum.core.config import MathSettings
from bignum.core.logging import configure_logging
from bignum.core.numeral.alphabets import AlphabetRegistry
from bignum.runtime import MathRuntime


@pytest.fixture(autouse=True)
def _restore_logging():
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package_logger = logging.getLogger("bignum")
    package_level = package_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package_logger.setLevel(package_level)
    structlog.reset_defaults()


def _json_lines(err: str) -> list:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class TestConfigureLogging:
    def test_verbose_enables_debug(self):
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("bignum").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self):
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("bignum").level == logging.WARNING

    def test_json_mode_output(self, capfd):
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("bignum.test")
        log.warning("json test", answer=42)
        parsed = _json_lines(capfd.readouterr().err)[-1]
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "bignum.test"
        assert "timestamp" in parsed

    def test_registration_is_logged(self, capfd):
        configure_logging(verbose=True, log_json=True)
        AlphabetRegistry().register("dna", "ACGT")
        events = [entry["event"] for entry in _json_lines(capfd.readouterr().err)]
        assert "Registered numeral system dna (4 symbols)" in events

    def test_runtime_assembly_is_logged(self, capfd):
        configure_logging(verbose=True, log_json=True)
        MathRuntime(MathSettings(big_math_strategy="pure", default_scale=5))
        entries = _json_lines(capfd.readouterr().err)
        assert any(entry["event"] == "Selected BigMath strategy pure" for entry in entries)
        assert any(entry["event"].startswith("Math runtime ready") for entry in entries)
        assert all(entry["logger"].startswith("bignum.") for entry in entries)

    def test_quiet_by_default(self, capfd):
        configure_logging(verbose=False, log_json=True)
        AlphabetRegistry().register("dna", "ACGT")
        assert capfd.readouterr().err == ""
