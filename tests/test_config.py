from lexiclear.config import Settings


def test_defaults(monkeypatch, tmp_path):
    for name in ("OPENAI_API_KEY", "GOOGLE_API_KEY", "CACHE_TTL_SECONDS", "EXPLAIN_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env(env_file=str(tmp_path / "missing.env"))

    assert settings.openai_api_key is None
    assert settings.google_api_key is None
    assert settings.cache_ttl == 3600
    assert settings.explain_timeout == 10.0
    assert settings.status_timeout == 5.0
    assert settings.openai_model == "gpt-3.5-turbo"


def test_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("GOOGLE_API_KEY", "   ")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env(env_file=str(tmp_path / "missing.env"))

    assert settings.openai_api_key == "sk-abc"
    assert settings.google_api_key is None
    assert settings.cache_ttl == 60
    assert settings.log_level == "DEBUG"


def test_loads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_MODEL", "placeholder")
    monkeypatch.delenv("OPENAI_MODEL")
    env_file = tmp_path / ".dev.env"
    env_file.write_text("OPENAI_MODEL=gpt-from-file\n")

    settings = Settings.from_env(env_file=str(env_file))

    assert settings.openai_model == "gpt-from-file"
