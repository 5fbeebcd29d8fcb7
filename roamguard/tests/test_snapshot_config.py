from __future__ import annotations

import json

import pytest

from roamguard.app_api.snapshot_config import load_snapshot, parse_snapshot
from roamguard.core.domain.models import INVALID_SUBSCRIPTION_ID, SubscriptionState


def _payload(**overrides) -> dict:
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
            {"subscription_id": 2, "in_call": True, "ciwlan_enabled": True, "ims_registered_on_ciwlan": True},
        ],
    }
    payload.update(overrides)
    return payload


def test_parse_snapshot_builds_input_with_defaults():
    inp = parse_snapshot(_payload())
    assert inp.target_sub_id == 1
    assert inp.multi_sim_ciwlan_supported is True
    assert inp.charge_indication_disabled is False
    assert inp.subscriptions[1] == SubscriptionState(1)
    assert inp.subscriptions[2].in_call is True
    assert inp.subscriptions[2].in_ciwlan_only_mode is False


def test_parse_snapshot_optional_sub_ids_default_to_invalid():
    payload = _payload(subscriptions=[{"subscription_id": 1}])
    del payload["default_data_sub_id"]
    payload["non_default_data_sub_id"] = None
    inp = parse_snapshot(payload)
    assert inp.default_data_sub_id == INVALID_SUBSCRIPTION_ID
    assert inp.non_default_data_sub_id == INVALID_SUBSCRIPTION_ID


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "JSON object"),
        ({"requested_enable": True}, "target_sub_id"),
        (_payload(target_sub_id=True), "must be int"),
        (_payload(is_roaming_now="yes"), "must be bool"),
        (_payload(subscriptions=[{"subscription_id": 1}, {"subscription_id": 1}]), "Duplicate"),
        (_payload(subscriptions=["x"]), "JSON objects"),
        (_payload(subscriptions=[{"in_call": True}]), "subscription_id"),
    ],
)
def test_parse_snapshot_rejects_bad_payloads(payload, message):
    with pytest.raises(ValueError, match=message):
        parse_snapshot(payload)


def test_load_snapshot_reads_file(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps(_payload()), encoding="utf-8")
    inp = load_snapshot(path)
    assert sorted(inp.subscriptions) == [1, 2]


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_snapshot(tmp_path / "missing.json")


def test_load_snapshot_rejects_directory(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_snapshot(tmp_path)
