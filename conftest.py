# conftest.py
# Configuração global para pytest: adiciona 'src' ao sys.path e expõe fakes
# compartilhados (sink, provedor de ambiente, compressor) e settings isolados.
import sys
import threading
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class RecordingSink:
    """Sink em memória que guarda (severity, line) na ordem recebida."""

    def __init__(self):
        self.records = []
        self._lock = threading.Lock()

    def emit(self, severity, line):
        with self._lock:
            self.records.append((severity, line))


class FakeEnvironment:
    def __init__(self, available=True):
        self._available = available

    def available(self):
        return self._available

    def snapshot(self):
        return "OS: TestOS 1.0\nHost: test-host\n"

    def active_applications(self):
        return [("editor", "/usr/bin/editor", 101), ("shell", "", 102)]


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def fake_environment():
    return FakeEnvironment()


@pytest.fixture
def make_settings(tmp_path):
    """Retorna uma fábrica de settings apontando para um diretório temporário."""

    def _make(**overrides):
        settings = {
            "app_name": "TestApp",
            "log_dir": tmp_path / "logs",
            "durable_writes": False,
            "environment_report": False,
        }
        settings.update(overrides)
        return settings

    return _make
