import pytest

from roshdman.core.config import Settings, validate_config


def test_defaults():
    cfg = Settings(_env_file=None)

    assert cfg.PORT == 3001
    assert cfg.DATA_FILE == "./data.json"
    assert cfg.BCRYPT_ROUNDS == 10
    assert cfg.cors_origins == ["*"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATA_FILE", "/srv/roshdman/data.json")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    cfg = Settings(_env_file=None)

    assert cfg.DATA_FILE == "/srv/roshdman/data.json"
    assert cfg.cors_origins == ["https://a.example", "https://b.example"]


def test_validate_config_passes_for_existing_directory(tmp_path):
    cfg = Settings(_env_file=None, DATA_FILE=str(tmp_path / "data.json"))

    assert validate_config(settings_obj=cfg) is True


def test_validate_config_warns_when_not_strict(tmp_path, caplog):
    cfg = Settings(_env_file=None, DATA_FILE=str(tmp_path / "missing" / "data.json"))

    assert validate_config(strict=False, settings_obj=cfg) is False
    assert "DATA_FILE directory does not exist" in caplog.text


def test_validate_config_raises_when_strict(tmp_path):
    cfg = Settings(_env_file=None, DATA_FILE=str(tmp_path / "data.json"), BCRYPT_ROUNDS=2)

    with pytest.raises(RuntimeError, match="BCRYPT_ROUNDS"):
        validate_config(strict=True, settings_obj=cfg)
