"""Tests for the single-snapshot decision CLI."""

from __future__ import annotations

import json
import sys


def _write_snapshot(tmp_path, **overrides):
    payload = {
        "target_sub_id": 1,
        "requested_enable": False,
        "current_roaming_enabled": True,
        "is_roaming_now": True,
        "default_data_sub_id": 1,
        "non_default_data_sub_id": 2,
        "multi_sim_ciwlan_supported": True,
        "subscriptions": [
            {"subscription_id": 1},
            {
                "subscription_id": 2,
                "in_call": True,
                "ciwlan_enabled": True,
                "ciwlan_mode_supported": False,
                "ims_registered_on_ciwlan": True,
            },
        ],
    }
    payload.update(overrides)
    path = tmp_path / "snap.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_run_decision_json_output(tmp_path, capsys):
    from roamguard.cli import run_decision as mod

    path = _write_snapshot(tmp_path)
    exit_code = mod.main(["--snapshot", str(path), "--json"])
    assert exit_code == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "REQUIRE_CONFIRMATION"
    assert payload["dialog_type"] == "DISABLE_ROAMING_DROPS_CIWLAN_CALL"
    assert payload["checked_sub_id"] == 2
    assert payload["reasons"] == ["CROSS_CHECK_REDIRECTED", "CIWLAN_CALL_AT_RISK"]


def test_run_decision_text_output_with_debug(tmp_path, capsys, monkeypatch):
    from roamguard.cli import run_decision as mod

    path = _write_snapshot(tmp_path, is_roaming_now=False)
    monkeypatch.setattr(sys, "argv", ["run_decision.py", "--snapshot", str(path), "--debug"])
    assert mod.main() == 0

    out = capsys.readouterr().out
    assert "DECISION: APPLY_DIRECTLY" in out
    assert "NOT_ROAMING" in out
    assert "[debug] DECISION target=1" in out


def test_run_decision_missing_subscription_is_error(tmp_path, capsys):
    from roamguard.cli import run_decision as mod

    path = _write_snapshot(tmp_path, default_data_sub_id=5)
    assert mod.main(["--snapshot", str(path)]) == 1
    out = capsys.readouterr().out
    assert "ERROR:" in out
    assert "default_data_sub_id=5" in out


def test_run_decision_unknown_policy_is_error(tmp_path, capsys):
    from roamguard.cli import run_decision as mod

    path = _write_snapshot(tmp_path)
    assert mod.main(["--snapshot", str(path), "--policy-version", "v9", "--json"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["exit_code"] == 1
    assert "v9" in payload["error"]


def test_run_decision_directory_snapshot_is_error(tmp_path, capsys):
    from roamguard.cli import run_decision as mod

    assert mod.main(["--snapshot", str(tmp_path)]) == 1
    assert "ERROR:" in capsys.readouterr().out
