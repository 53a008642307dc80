import re
import zipfile

from insightlog import InsightCenter, Severity
from insightlog.system.compression import ZipFileCompressor, ZipUtilityCompressor
from insightlog.system.environment import PsutilEnvironment
from insightlog.system.sink import LoggingSink


def _center(make_settings, recording_sink, **kwargs):
    kwargs.setdefault("compressor", ZipFileCompressor())
    return InsightCenter(settings=make_settings(), sink=recording_sink, **kwargs)


def test_end_to_end_log_and_archive(make_settings, recording_sink, fake_environment):
    """5 entradas em severidades distintas -> 5 linhas na ordem -> relatório."""
    center = _center(make_settings, recording_sink, environment=fake_environment)
    center.trace("a")
    center.info("b")
    center.notice("x")
    center.warning("d")
    center.error("e")
    assert center.flush(timeout=5)

    lines = center.log_file.read_text(encoding="utf-8").splitlines()
    assert [re.sub(r"^.*? \[", "[", line) for line in lines] == [
        "[TRACE] a",
        "[INFO] b",
        "[NOTICE] x",
        "[WARN] d",
        "[ERROR] e",
    ]

    artifact = center.make_archive()
    assert artifact is not None and str(artifact)
    assert artifact.is_file()
    assert artifact == center.log_directory / "insight_report.zip"
    assert not (center.log_directory / "report_temp").exists()
    with zipfile.ZipFile(artifact) as zf:
        assert "TestApp.log" in zf.namelist()
    center.close()


def test_archive_without_any_write_is_absent(make_settings, recording_sink):
    center = _center(make_settings, recording_sink)
    assert center.make_archive() is None
    center.close()


def test_make_archive_waits_for_pending_writes(make_settings, recording_sink):
    """make_archive drena a fila antes de copiar o log."""
    center = _center(make_settings, recording_sink)
    for i in range(200):
        center.critical(f"pending {i}")
    artifact = center.make_archive()
    with zipfile.ZipFile(artifact) as zf:
        content = zf.read("TestApp.log").decode("utf-8")
    assert content.count("\n") == 200
    assert content.rstrip("\n").endswith("[CRITICAL] pending 199")
    center.close()


def test_log_directory_and_file(make_settings, recording_sink, tmp_path):
    center = _center(make_settings, recording_sink)
    assert center.log_directory == tmp_path / "logs"
    assert center.log_file == tmp_path / "logs" / "TestApp.log"
    assert center.app_name == "TestApp"
    center.close()


def test_app_name_argument_overrides_settings(make_settings, recording_sink):
    center = InsightCenter("Other", settings=make_settings(), sink=recording_sink)
    assert center.log_file.name == "Other.log"
    center.close()


def test_log_directory_defaults_to_locator(make_settings, recording_sink, monkeypatch):
    from insightlog.core import center as center_mod

    monkeypatch.setattr(center_mod, "directory_for", lambda name: center_mod.Path("/fake") / name)
    center = InsightCenter(settings=make_settings(log_dir=None), sink=recording_sink)
    assert str(center.log_directory) == "/fake/TestApp"
    center.close()


def test_default_collaborators(make_settings):
    center = InsightCenter(settings=make_settings(environment_report=True))
    assert isinstance(center._sink, LoggingSink)
    assert isinstance(center._environment, PsutilEnvironment)
    assert isinstance(center._compressor, ZipUtilityCompressor)
    assert center._compressor.utility == "/usr/bin/zip"
    center.close()


def test_environment_report_disabled(make_settings, recording_sink):
    center = InsightCenter(settings=make_settings(environment_report=False), sink=recording_sink)
    assert center._environment is None
    center.close()


def test_missing_zip_utility_yields_none(make_settings, recording_sink, tmp_path):
    settings = make_settings(zip_utility=str(tmp_path / "missing-zip"))
    with InsightCenter(settings=settings, sink=recording_sink) as center:
        center.info("something")
        assert center.make_archive() is None
    assert any("ZIP" in line for sev, line in recording_sink.records if sev is Severity.ERROR)


def test_rotation_through_facade(make_settings, recording_sink):
    center = _center(make_settings, recording_sink)
    center._rotation.limit = 100
    for i in range(10):
        center.info(f"line number {i}")
        assert center.flush(timeout=5)
    backups = list(center.log_directory.glob("TestApp_*.log"))
    assert backups
    assert center.log_file.stat().st_size <= 200
    center.close()


def test_context_manager_closes_writer(make_settings, recording_sink):
    with _center(make_settings, recording_sink) as center:
        center.info("inside")
    assert center._writer.closed
    assert "[INFO] inside" in center.log_file.read_text(encoding="utf-8")
