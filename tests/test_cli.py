import json
import sys

import pytest

from job_radar.cli import main
from job_radar.core.store import JobStore
from job_radar.utils.config import Config


@pytest.fixture
def run_cli(tmp_path, monkeypatch):
    for env_var in Config.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    db_path = tmp_path / "db.json"

    def _run(*args):
        argv = ["job-radar", "--config", str(tmp_path / "config.json"), "--db", str(db_path), *args]
        monkeypatch.setattr(sys, "argv", argv)
        main()
        return db_path

    return _run


def test_refresh_then_top(run_cli, capsys):
    db_path = run_cli("refresh", "--skills", "AI & Automation")

    assert len(JobStore(db_path)) > 0
    assert "Fetched" in capsys.readouterr().out

    run_cli("top")

    assert "Top matches" in capsys.readouterr().out


def test_profile_edits_persist(run_cli, capsys):
    db_path = run_cli("profile", "--add-skill", "AI & Automation", "--set-rate", "40")

    profile = JobStore(db_path).get_profile()
    assert profile.skills == ["AI & Automation"]
    assert profile.min_hourly_rate == 40

    run_cli("profile", "--remove-skill", "AI & Automation")

    assert JobStore(db_path).get_profile().skills == []


def test_config_set_writes_file(run_cli, tmp_path, capsys):
    run_cli("config", "--set", "search.refresh_limit", "10")

    saved = json.loads((tmp_path / "config.json").read_text())
    assert saved["search"]["refresh_limit"] == 10


def test_clean_reports_removed(run_cli, capsys):
    run_cli("refresh")
    run_cli("clean", "--days", "0")

    assert "Removed" in capsys.readouterr().out


def test_invalid_sort_exits(run_cli):
    with pytest.raises(SystemExit):
        run_cli("search", "--sort", "popularity")


def test_no_command_prints_help_and_exits(run_cli, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_cli()

    assert excinfo.value.code == 1


def test_db_flag_wins_over_environment(run_cli, tmp_path, monkeypatch):
    env_db = tmp_path / "env-db.json"
    monkeypatch.setenv("JOB_RADAR_DB_PATH", str(env_db))

    db_path = run_cli("profile", "--add-skill", "AI & Automation")

    assert JobStore(db_path).get_profile().skills == ["AI & Automation"]
    assert not env_db.exists()


def test_sources_name_lists_one_board(run_cli, capsys):
    run_cli("sources", "--name", "LinkedIn", "--skills", "AI & Automation")

    out = capsys.readouterr().out
    assert "LinkedIn: 1 jobs" in out
    assert "linkedin.com/jobs/search" in out
