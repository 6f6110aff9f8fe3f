import json
import logging

from print_relay import env
from print_relay.audit import audit


def test_audit_appends_json_lines(audit_path):
    audit("print_done", {"ip": "10.0.0.5", "size": 8})
    audit("print_failed", {"ip": "10.0.0.5", "error": "ECONNREFUSED"})

    records = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in records] == ["print_done", "print_failed"]
    assert records[0]["payload"] == {"ip": "10.0.0.5", "size": 8}
    assert records[0]["service"] == env.APP_NAME


def test_audit_disabled_with_empty_path(monkeypatch, tmp_path):
    monkeypatch.setattr(env, "AUDIT_LOG_PATH", "")
    audit("print_done", {})
    assert list(tmp_path.iterdir()) == []


def test_audit_write_failure_is_logged_not_raised(monkeypatch, tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setattr(env, "AUDIT_LOG_PATH", str(blocker / "audit.jsonl"))

    with caplog.at_level(logging.WARNING, logger="print_relay.audit"):
        audit("print_done", {"ip": "10.0.0.5"})

    assert "Could not write audit event print_done" in caplog.text
