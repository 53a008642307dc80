import logging

from insightlog.system import sink as sink_mod
from insightlog.system.severity import Severity


def test_logging_sink_uses_matching_level(caplog):
    s = sink_mod.LoggingSink("insightlog.test.sink")
    with caplog.at_level(1, logger="insightlog.test.sink"):
        s.emit(Severity.NOTICE, "2025 [NOTICE] hello\n")
        s.emit(Severity.TRACE, "2025 [TRACE] detail\n")
    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (Severity.NOTICE.logging_level, "2025 [NOTICE] hello") in levels
    assert (Severity.TRACE.logging_level, "2025 [TRACE] detail") in levels


def test_logging_sink_accepts_logger_instance():
    lg = logging.getLogger("insightlog.test.instance")
    assert sink_mod.LoggingSink(lg).logger is lg


def test_console_fallback_writes_to_stderr(capsys):
    sink_mod.console_fallback("2025 [ERROR] boom\n")
    err = capsys.readouterr().err
    assert "[insightlog] 2025 [ERROR] boom" in err


def test_console_fallback_never_raises(monkeypatch):
    class Broken:
        def write(self, s):
            raise OSError("closed")

        def flush(self):
            raise OSError("closed")

    monkeypatch.setattr(sink_mod.sys, "stderr", Broken())
    sink_mod.console_fallback("line")


def test_report_falls_back_when_sink_fails(capsys):
    class Failing:
        def emit(self, severity, line):
            raise RuntimeError("sink down")

    sink_mod.report(Failing(), Severity.ERROR, "rotation failed")
    sink_mod.report(None, Severity.ERROR, "no sink")
    err = capsys.readouterr().err
    assert "rotation failed" in err and "no sink" in err


def test_report_uses_sink(recording_sink):
    sink_mod.report(recording_sink, Severity.ERROR, "msg")
    assert recording_sink.records == [(Severity.ERROR, "msg")]
