import json

from job_radar.utils.config import Config


def test_defaults_without_file(config):
    assert config.get_retention_cap() == 500
    assert config.include_live() is False
    assert config.get("search.refresh_limit") == 50
    assert config.get("search.missing", "fallback") == "fallback"
    assert config.get_server_address() == ("127.0.0.1", 3001)


def test_file_values_deep_merge_over_defaults(tmp_path, monkeypatch):
    for env_var in Config.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"search": {"include_live": True}}))

    config = Config(str(path))

    assert config.include_live() is True
    assert config.get("search.refresh_limit") == 50


def test_set_and_save_round_trip(config):
    config.set("server.port", 4000)
    config.set("custom.nested.value", "x")
    config.save()

    reloaded = Config(str(config.config_path))

    assert reloaded.get("server.port") == 4000
    assert reloaded.get("custom.nested.value") == "x"


def test_environment_overrides_file(config, monkeypatch):
    monkeypatch.setenv("JOB_RADAR_PORT", "8080")
    monkeypatch.setenv("JOB_RADAR_INCLUDE_LIVE", "yes")
    monkeypatch.setenv("JOB_RADAR_DB_PATH", "/tmp/other.json")

    assert config.get_server_address() == ("127.0.0.1", 8080)
    assert config.include_live() is True
    assert config.get_db_path() == "/tmp/other.json"


def test_override_beats_environment_and_is_not_saved(config, monkeypatch):
    monkeypatch.setenv("JOB_RADAR_DB_PATH", "/tmp/other.json")

    config.override("storage.db_path", "/tmp/flag.json")
    config.save()

    assert config.get_db_path() == "/tmp/flag.json"
    assert "flag.json" not in config.config_path.read_text()


def test_unreadable_file_falls_back_to_defaults(tmp_path, monkeypatch):
    for env_var in Config.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    path = tmp_path / "config.json"
    path.write_text("{broken")

    config = Config(str(path))

    assert config.get_retention_cap() == 500
