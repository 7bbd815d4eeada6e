from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import build_parser, main


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    (tmp_path / "profile.json").write_text(
        json.dumps({"name": "Jane Doe", "email": "jane@test.com", "uid": "jane-1"})
    )
    (tmp_path / "config.json").write_text(json.dumps({"db_path": "tracker.db"}))
    return tmp_path


def _run(config_dir: Path, *args: str) -> int:
    return main(["--config-dir", str(config_dir), *args])


def _add(config_dir: Path, company: str = "Acme", salary: str = "50000") -> int:
    return _run(
        config_dir,
        "add",
        "--company", company,
        "--title", "Engineer",
        "--location", "Remote",
        "--salary", salary,
        "--link", "https://acme.example/jobs/1",
    )


def _listed_ids(output: str) -> list[str]:
    return [line.split(" | ")[0] for line in output.splitlines() if " | " in line]


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_commands_require_login(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(config_dir, "list") == 1
    assert "Please log in" in capsys.readouterr().out


def test_login_whoami_logout(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(config_dir, "login") == 0
    out = capsys.readouterr().out
    assert "Welcome, Jane Doe!" in out
    assert (config_dir / "session.json").is_file()

    assert _run(config_dir, "whoami") == 0
    assert capsys.readouterr().out.strip() == "JD | Jane Doe | jane@test.com | jane-1"

    assert _run(config_dir, "logout") == 0
    assert "Logged out successfully" in capsys.readouterr().out
    assert not (config_dir / "session.json").exists()


def test_add_list_edit_delete(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(config_dir, "login")
    assert _add(config_dir) == 0
    assert "Job application for Engineer at Acme added successfully!" in capsys.readouterr().out

    assert _run(config_dir, "list") == 0
    out = capsys.readouterr().out
    assert "PHP 50,000.00 | submitted" in out
    assert "Total applications: 1" in out
    (record_id,) = _listed_ids(out)

    assert _run(config_dir, "edit", record_id[:8], "--status", "Interview") == 0
    capsys.readouterr()
    _run(config_dir, "list")
    assert "| interview |" in capsys.readouterr().out

    assert _run(config_dir, "delete", record_id, "--yes") == 0
    assert "deleted successfully" in capsys.readouterr().out
    _run(config_dir, "list")
    assert "No applications yet." in capsys.readouterr().out


def test_add_reports_validation_errors(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(config_dir, "login")
    capsys.readouterr()

    assert _add(config_dir, salary="-5") == 1

    out = capsys.readouterr().out
    assert "error: Please enter a valid salary amount" in out
    assert "salary: Please enter a valid salary amount" in out


def test_edit_rejects_future_date(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(config_dir, "login")
    _add(config_dir)
    _run(config_dir, "list")
    (record_id,) = _listed_ids(capsys.readouterr().out)

    assert _run(config_dir, "edit", record_id, "--date", "2999-01-01") == 1
    assert "Date applied cannot be in the future" in capsys.readouterr().out


def test_list_sorting(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(config_dir, "login")
    _add(config_dir, company="Zeta", salary="100")
    _add(config_dir, company="Alpha", salary="900")
    capsys.readouterr()

    _run(config_dir, "list", "--sort", "company_name")
    companies = [line.split(" | ")[1] for line in capsys.readouterr().out.splitlines() if " | " in line]
    assert companies == ["Alpha", "Zeta"]

    _run(config_dir, "list", "--sort", "salary", "--desc")
    companies = [line.split(" | ")[1] for line in capsys.readouterr().out.splitlines() if " | " in line]
    assert companies == ["Alpha", "Zeta"]


def test_delete_can_be_cancelled(
    config_dir: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _run(config_dir, "login")
    _add(config_dir)
    _run(config_dir, "list")
    (record_id,) = _listed_ids(capsys.readouterr().out)
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    assert _run(config_dir, "delete", record_id) == 0
    assert "Cancelled." in capsys.readouterr().out

    _run(config_dir, "list")
    assert "Total applications: 1" in capsys.readouterr().out


def test_unknown_record_id(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(config_dir, "login")
    capsys.readouterr()

    assert _run(config_dir, "delete", "nope", "--yes") == 1
    assert "No application with id nope" in capsys.readouterr().out


def test_view_opens_link(
    config_dir: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    opened: list[str] = []
    monkeypatch.setattr("webbrowser.open_new_tab", opened.append)
    _run(config_dir, "login")
    _add(config_dir)
    _run(config_dir, "list")
    (record_id,) = _listed_ids(capsys.readouterr().out)

    assert _run(config_dir, "view", record_id) == 0
    assert opened == ["https://acme.example/jobs/1"]


def test_config_validate_and_show(config_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(config_dir, "config", "validate") == 0
    assert "Config OK" in capsys.readouterr().out

    assert _run(config_dir, "config", "show") == 0
    out = capsys.readouterr().out
    assert "collection=appliedjobs" in out
    assert "Profile: Jane Doe (jane@test.com)" in out


def test_invalid_config_stops_commands(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "profile.json").write_text(json.dumps({"name": "Your Full Name", "email": "x"}))

    assert _run(tmp_path, "list") == 1
    assert "Config validation failed" in capsys.readouterr().out
