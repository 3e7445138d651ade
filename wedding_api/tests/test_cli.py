from typer.testing import CliRunner

from wedding_api.admin.auth import decode_admin_token
from wedding_api.cli import app

runner = CliRunner()


def test_issue_admin_token():
    result = runner.invoke(app, ["issue-admin-token", "--email", "planner@wedding.example", "--id", "planner"])

    assert result.exit_code == 0
    principal = decode_admin_token(result.output.strip())
    assert principal.id == "planner"
    assert principal.email == "planner@wedding.example"
    assert principal.role == "admin"


def test_rsvp_status_open(monkeypatch):
    monkeypatch.setenv("RSVP_BY_DATE", "2999-12-31")

    result = runner.invoke(app, ["rsvp-status"])

    assert result.exit_code == 0
    assert "RSVP is open" in result.output
    assert "RSVP by: 2999-12-31" in result.output


def test_rsvp_status_closed(monkeypatch):
    monkeypatch.setenv("RSVP_BY_DATE", "2000-01-01")

    result = runner.invoke(app, ["rsvp-status"])

    assert "RSVP has closed" in result.output


def test_seed_asks_for_confirmation():
    result = runner.invoke(app, ["seed"], input="n\n")

    assert result.exit_code == 1
    assert "Aborted" in result.output
