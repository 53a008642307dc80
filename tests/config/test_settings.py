from pathlib import Path

import pytest

from insightlog.config import settings as st


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for var in st.ENV_KEYS:
        monkeypatch.delenv(var, raising=False)
    # isola do .env do diretório de trabalho
    monkeypatch.setenv("INSIGHT_ENV_FILE", str(tmp_path / "absent.env"))


def test_defaults():
    s = st.validate_settings(st.load_settings())
    assert s["app_name"] == "InsightKit"
    assert s["log_dir"] is None
    assert s["rotate_limit_bytes"] == 4_000_000
    assert s["excerpt_chars"] == 12000
    assert s["zip_utility"] == "/usr/bin/zip"
    assert s["durable_writes"] is True
    assert s["environment_report"] is True


def test_env_file_and_environment_precedence(tmp_path, monkeypatch):
    """Variáveis do processo sobrescrevem o arquivo .env."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comentário\nINSIGHT_APP_NAME='FromFile'\nINSIGHT_ROTATE_LIMIT_BYTES=1000\nlinha-invalida\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("INSIGHT_ENV_FILE", str(env_file))
    monkeypatch.setenv("INSIGHT_ROTATE_LIMIT_BYTES", "2048")
    monkeypatch.setenv("INSIGHT_DURABLE_WRITES", "off")
    monkeypatch.setenv("INSIGHT_LOG_DIR", str(tmp_path / "logs"))
    s = st.validate_settings(st.load_settings())
    assert s["app_name"] == "FromFile"
    assert s["rotate_limit_bytes"] == 2048
    assert s["durable_writes"] is False
    assert s["log_dir"] == Path(tmp_path / "logs")


@pytest.mark.parametrize(
    "key,value",
    [
        ("rotate_limit_bytes", "abc"),
        ("rotate_limit_bytes", 0),
        ("excerpt_chars", -5),
        ("durable_writes", "maybe"),
        ("archive_flush_timeout", -1),
    ],
)
def test_validate_rejects_invalid_values(key, value):
    with pytest.raises(ValueError):
        st.validate_settings({key: value})


def test_validate_requires_dict():
    with pytest.raises(TypeError):
        st.validate_settings(["not", "a", "dict"])


def test_get_settings_falls_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("INSIGHT_EXCERPT_CHARS", "lots")
    s = st.get_settings()
    assert s["excerpt_chars"] == 12000
    assert any("DEFAULT_SETTINGS" in r.getMessage() for r in caplog.records)


def test_get_settings_overrides_ignore_none(monkeypatch):
    monkeypatch.setenv("INSIGHT_APP_NAME", "FromEnv")
    assert st.get_settings({"app_name": None})["app_name"] == "FromEnv"
    assert st.get_settings({"app_name": "Explicit"})["app_name"] == "Explicit"
