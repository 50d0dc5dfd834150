from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from pulse.adapters.storage.file_store import FileStorage
from pulse.cli.app import app
from pulse.cli.commands import dashboard as dashboard_module
from pulse.core.lifecycle import SessionManager
from pulse.core.protocols import Region

runner = CliRunner()


def _submit(data_dir: Path, role: str = "engineer", *hopes: str):
    args = ["submit", "--data-dir", str(data_dir), "--no-interactive", "--role", role]
    args += ["--familiarity", "beginner"]
    for hope in hopes or ("networking",):
        args += ["--hope", hope]
    return runner.invoke(app, args)


def _manager(data_dir: Path) -> SessionManager:
    return SessionManager(FileStorage(data_dir))


def test_submit_records_response(tmp_path: Path):
    result = _submit(tmp_path, "engineer", "practical-skills", "networking")
    assert result.exit_code == 0
    assert "Response recorded" in result.output
    responses = _manager(tmp_path).responses()
    assert len(responses) == 1
    assert [hope.value for hope in responses[0].hope] == ["practical-skills", "networking"]


def test_submit_without_hope_fails(tmp_path: Path):
    result = runner.invoke(
        app,
        [
            "submit",
            "--data-dir",
            str(tmp_path),
            "--no-interactive",
            "--role",
            "engineer",
            "--familiarity",
            "beginner",
        ],
    )
    assert result.exit_code == 1
    assert "Select at least one option." in result.output
    assert _manager(tmp_path).responses() == []


def test_submit_unknown_role_fails(tmp_path: Path):
    result = _submit(tmp_path, "wizard")
    assert result.exit_code == 1
    assert "not valid" in result.output


def test_submit_prompts_for_missing_hope(tmp_path: Path):
    result = runner.invoke(
        app,
        ["submit", "--data-dir", str(tmp_path), "--role", "student", "--familiarity", "none"],
        input="\nnope\n1,networking\n",
    )
    assert result.exit_code == 0
    assert "Please select at least one option." in result.output
    assert "Unknown option(s): nope." in result.output
    record = _manager(tmp_path).responses()[0]
    assert [hope.value for hope in record.hope] == ["practical-skills", "networking"]


def test_import_records_valid_entries(tmp_path: Path):
    answers = tmp_path / "answers.yaml"
    answers.write_text(
        """
responses:
  - role: engineer
    familiarity: beginner
    hope: [practical-skills, networking]
  - role: designer
    familiarity: expert
    hope: inspiration
  - role: designer
    familiarity: expert
    hope: []
  - just a string
""".strip(),
        encoding="utf-8",
    )
    data_dir = tmp_path / "data"
    result = runner.invoke(app, ["import", str(answers), "--data-dir", str(data_dir)])
    assert result.exit_code == 0
    assert "Imported 2 responses (2 skipped)" in result.output
    assert len(_manager(data_dir).responses()) == 2


def test_import_rejects_non_list_file(tmp_path: Path):
    answers = tmp_path / "answers.yaml"
    answers.write_text("responses: nope", encoding="utf-8")
    result = runner.invoke(app, ["import", str(answers), "--data-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "list of responses" in result.output


def test_dashboard_shows_aggregates(tmp_path: Path):
    _submit(tmp_path, "engineer", "networking")
    _submit(tmp_path, "designer", "networking", "inspiration")
    result = runner.invoke(app, ["dashboard", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "Total responses: 2" in result.output
    assert "Primary Role" in result.output
    assert "100.0%" in result.output
    assert "50.0%" in result.output


def test_dashboard_empty_session_shows_placeholders(tmp_path: Path):
    result = runner.invoke(app, ["dashboard", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "No data yet" in result.output
    assert "No responses yet" in result.output


def test_dashboard_unknown_session(tmp_path: Path):
    result = runner.invoke(app, ["dashboard", "--data-dir", str(tmp_path), "--session", "nope"])
    assert result.exit_code == 1
    assert "Session not found" in result.output


def test_dashboard_watch_rereads_storage_on_each_refresh(tmp_path: Path, monkeypatch):
    _submit(tmp_path, "engineer")
    pauses: list[float] = []

    def fake_sleep(seconds: float) -> None:
        pauses.append(seconds)
        if len(pauses) == 1:
            _manager(tmp_path).record_response(
                {"role": "designer", "familiarity": "expert", "hope": ["inspiration"]}
            )
            return
        raise KeyboardInterrupt

    monkeypatch.setattr(dashboard_module, "_sleep", fake_sleep)
    result = runner.invoke(
        app, ["dashboard", "--watch", "--interval", "2", "--data-dir", str(tmp_path)]
    )
    assert result.exit_code == 0, result.output
    assert pauses == [2.0, 2.0]
    assert "Total responses: 2" in result.output
    assert "Designer" in result.output


def test_dashboard_reports_corrupt_responses_file(tmp_path: Path):
    _submit(tmp_path)
    responses_file = tmp_path / "workshopResponses.json"
    responses_file.write_text("[{", encoding="utf-8")
    result = runner.invoke(app, ["dashboard", "--data-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "unreadable" in result.output
    assert responses_file.read_text(encoding="utf-8") == "[{"


def test_submit_refuses_corrupt_sessions_file(tmp_path: Path):
    _submit(tmp_path)
    sessions_file = tmp_path / "workshopSessions.json"
    sessions_file.write_text("{broken", encoding="utf-8")
    responses_before = FileStorage(tmp_path).get(Region.RESPONSES)
    result = _submit(tmp_path, "designer")
    assert result.exit_code == 1
    assert "unreadable" in result.output
    assert sessions_file.read_text(encoding="utf-8") == "{broken"
    assert FileStorage(tmp_path).get(Region.RESPONSES) == responses_before


def test_sessions_new_on_empty_session_asks_for_confirmation(tmp_path: Path):
    result = runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)], input="n\n")
    assert result.exit_code == 0
    assert "Kept the current session." in result.output
    assert len(_manager(tmp_path).list_sessions()) == 1


def test_sessions_new_confirmed(tmp_path: Path):
    result = runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)], input="y\n")
    assert result.exit_code == 0
    assert "Started Session" in result.output
    sessions = _manager(tmp_path).list_sessions()
    assert len(sessions) == 2
    assert sessions[1].archived is True


def test_sessions_new_with_force(tmp_path: Path):
    result = runner.invoke(app, ["sessions", "new", "--force", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert len(_manager(tmp_path).list_sessions()) == 2


def test_sessions_list_and_switch(tmp_path: Path):
    _submit(tmp_path)
    first = _manager(tmp_path).active_session_id()
    runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)])

    listed = runner.invoke(app, ["sessions", "list", "--data-dir", str(tmp_path)])
    assert listed.exit_code == 0
    assert first in listed.output
    assert "archived" in listed.output

    switched = runner.invoke(app, ["sessions", "switch", first, "--data-dir", str(tmp_path)])
    assert switched.exit_code == 0
    assert "(archived)" in switched.output
    assert _manager(tmp_path).active_session_id() == first


def test_sessions_switch_missing(tmp_path: Path):
    result = runner.invoke(app, ["sessions", "switch", "nope", "--data-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "Session not found: nope" in result.output


def test_sessions_delete_active_is_refused(tmp_path: Path):
    active = _manager(tmp_path).active_session_id()
    result = runner.invoke(
        app, ["sessions", "delete", active, "--yes", "--data-dir", str(tmp_path)]
    )
    assert result.exit_code == 1
    assert "Cannot delete the active session" in result.output


def test_sessions_delete_archived(tmp_path: Path):
    _submit(tmp_path)
    old = _manager(tmp_path).active_session_id()
    runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)])
    result = runner.invoke(
        app, ["sessions", "delete", old, "--data-dir", str(tmp_path)], input="y\n"
    )
    assert result.exit_code == 0
    assert "1 responses" in result.output
    manager = _manager(tmp_path)
    assert not manager.registry.exists(old)
    assert manager.response_store.list_all() == []


def test_sessions_delete_declined(tmp_path: Path):
    _submit(tmp_path)
    old = _manager(tmp_path).active_session_id()
    runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)])
    result = runner.invoke(
        app, ["sessions", "delete", old, "--data-dir", str(tmp_path)], input="n\n"
    )
    assert result.exit_code == 0
    assert "Nothing deleted." in result.output
    assert _manager(tmp_path).registry.exists(old)


def test_export_without_data(tmp_path: Path):
    result = runner.invoke(app, ["export", "--data-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "No data to export." in result.output


def test_export_csv(tmp_path: Path):
    _submit(tmp_path, "engineer", "practical-skills", "networking")
    output = tmp_path / "out.csv"
    result = runner.invoke(
        app, ["export", "--data-dir", str(tmp_path), "--format", "csv", "--output", str(output)]
    )
    assert result.exit_code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Timestamp,Primary Role,AI Familiarity,Expected Takeaways"
    assert lines[1].endswith('"engineer","beginner","practical-skills; networking"')


def test_export_json_of_other_session(tmp_path: Path):
    _submit(tmp_path)
    old = _manager(tmp_path).active_session_id()
    runner.invoke(app, ["sessions", "new", "--data-dir", str(tmp_path)])
    output = tmp_path / "session.json"
    result = runner.invoke(
        app,
        ["export", "--data-dir", str(tmp_path), "-s", old, "-F", "json", "-o", str(output)],
    )
    assert result.exit_code == 0
    assert f'"id": "{old}"' in output.read_text(encoding="utf-8")
    assert '"archived": true' in output.read_text(encoding="utf-8")


def test_export_refuses_to_overwrite(tmp_path: Path):
    _submit(tmp_path)
    output = tmp_path / "out.csv"
    output.write_text("existing", encoding="utf-8")
    result = runner.invoke(app, ["export", "--data-dir", str(tmp_path), "-o", str(output)])
    assert result.exit_code == 1
    assert output.read_text(encoding="utf-8") == "existing"
    result = runner.invoke(
        app, ["export", "--data-dir", str(tmp_path), "-o", str(output), "--overwrite"]
    )
    assert result.exit_code == 0


def test_export_unsupported_format(tmp_path: Path):
    result = runner.invoke(app, ["export", "--data-dir", str(tmp_path), "--format", "xml"])
    assert result.exit_code == 1
    assert "Unsupported format" in result.output
