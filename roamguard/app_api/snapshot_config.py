from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from roamguard.core.domain.models import INVALID_SUBSCRIPTION_ID, RoamingDecisionInput, SubscriptionState

_SUBSCRIPTION_FLAGS = (
    "in_call",
    "ciwlan_mode_supported",
    "ciwlan_enabled",
    "in_ciwlan_only_mode",
    "ims_registered_on_ciwlan",
)


def _require(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in payload:
        raise ValueError(f"Missing required field '{key}' in snapshot")
    value = payload[key]
    if expected_type is int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Field '{key}' must be int")
        return value
    if not isinstance(value, expected_type):
        raise ValueError(f"Field '{key}' must be {expected_type.__name__}")
    return value


def _optional(payload: dict[str, Any], key: str, expected_type: type, default: Any) -> Any:
    if key not in payload or payload[key] is None:
        return default
    return _require(payload, key, expected_type)


def _parse_subscription(entry: Any) -> SubscriptionState:
    if not isinstance(entry, dict):
        raise ValueError("Subscription entries must be JSON objects")
    flags = {name: _optional(entry, name, bool, False) for name in _SUBSCRIPTION_FLAGS}
    return SubscriptionState(subscription_id=_require(entry, "subscription_id", int), **flags)


def parse_snapshot(payload: Any) -> RoamingDecisionInput:
    if not isinstance(payload, dict):
        raise ValueError("Snapshot must be a JSON object")

    entries = _optional(payload, "subscriptions", list, [])
    subscriptions: dict[int, SubscriptionState] = {}
    for entry in entries:
        state = _parse_subscription(entry)
        if state.subscription_id in subscriptions:
            raise ValueError(f"Duplicate subscription_id {state.subscription_id} in snapshot")
        subscriptions[state.subscription_id] = state

    return RoamingDecisionInput(
        target_sub_id=_require(payload, "target_sub_id", int),
        requested_enable=_require(payload, "requested_enable", bool),
        current_roaming_enabled=_require(payload, "current_roaming_enabled", bool),
        is_roaming_now=_require(payload, "is_roaming_now", bool),
        default_data_sub_id=_optional(payload, "default_data_sub_id", int, INVALID_SUBSCRIPTION_ID),
        non_default_data_sub_id=_optional(payload, "non_default_data_sub_id", int, INVALID_SUBSCRIPTION_ID),
        multi_sim_ciwlan_supported=_optional(payload, "multi_sim_ciwlan_supported", bool, False),
        charge_indication_disabled=_optional(payload, "charge_indication_disabled", bool, False),
        subscriptions=subscriptions,
    )


def load_snapshot(path: str | Path) -> RoamingDecisionInput:
    snapshot_path = Path(path)
    if not snapshot_path.is_file():
        raise ValueError(f"Snapshot file not found: {snapshot_path}")
    try:
        text = snapshot_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc
    return parse_snapshot(json.loads(text))
