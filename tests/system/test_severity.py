import logging

import pytest

from insightlog.system.severity import NOTICE_LEVEL, TRACE_LEVEL, Severity, tag


def test_tag_is_total_and_canonical():
    """Toda severidade mapeia para exatamente uma tag."""
    expected = {
        Severity.TRACE: "TRACE",
        Severity.INFO: "INFO",
        Severity.NOTICE: "NOTICE",
        Severity.WARNING: "WARN",
        Severity.ERROR: "ERROR",
        Severity.CRITICAL: "CRITICAL",
    }
    for sev in Severity:
        assert tag(sev) == expected[sev]
        assert sev.tag == expected[sev]
    assert len({s.tag for s in Severity}) == len(Severity)


def test_severities_are_ordered():
    assert list(Severity) == sorted(Severity)
    assert Severity.TRACE < Severity.INFO < Severity.NOTICE < Severity.WARNING < Severity.ERROR < Severity.CRITICAL


def test_logging_levels_follow_order():
    levels = [s.logging_level for s in Severity]
    assert levels == sorted(levels)
    assert Severity.TRACE.logging_level == TRACE_LEVEL
    assert Severity.NOTICE.logging_level == NOTICE_LEVEL
    assert logging.getLevelName(NOTICE_LEVEL) == "NOTICE"


def test_from_name_accepts_names_and_tags():
    assert Severity.from_name("warning") is Severity.WARNING
    assert Severity.from_name("WARN") is Severity.WARNING
    assert Severity.from_name(" Critical ") is Severity.CRITICAL
    with pytest.raises(ValueError):
        Severity.from_name("verbose")
