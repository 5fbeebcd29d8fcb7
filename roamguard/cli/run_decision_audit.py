"""Audit the roaming decision table over every dual-SIM flag combination.

Purpose:
  - Enumerate all inputs for a two-subscription device (DDS=1, nDDS=2),
    evaluate each, and verify decision invariants as named checks.
Outputs:
  - Outcome summary and PASS/FAIL per check on stdout; optional CSV of the table.
Example:
  - PYTHONPATH=. python3 roamguard/cli/run_decision_audit.py --csv decisions.csv
"""

from __future__ import annotations

import argparse
import itertools
import json
import sys
from datetime import datetime, timezone
from typing import Callable

import pandas as pd

from roamguard.core.domain.enums import DecisionKind, DialogType
from roamguard.core.domain.models import RoamingDecisionInput, SubscriptionState
from roamguard.core.engine.evaluator import RoamingPolicy, decide
from roamguard.core.policy.factory import default_policy_factory

DDS = 1
NDDS = 2

_INPUT_FLAGS = (
    "requested_enable",
    "current_roaming_enabled",
    "is_roaming_now",
    "multi_sim_ciwlan_supported",
    "charge_indication_disabled",
)
_SUB_FLAGS = (
    "in_call",
    "ciwlan_mode_supported",
    "ciwlan_enabled",
    "in_ciwlan_only_mode",
    "ims_registered_on_ciwlan",
)

_CONFIRM = DecisionKind.REQUIRE_CONFIRMATION.value
_NOT_APPLICABLE = DecisionKind.NOT_APPLICABLE.value
_ENABLE_DIALOG = DialogType.ENABLE_ROAMING_CHARGE_WARNING.value
_DROP_DIALOG = DialogType.DISABLE_ROAMING_DROPS_CIWLAN_CALL.value


def _enable_warning_case(df: pd.DataFrame) -> pd.Series:
    return df["requested_enable"] & ~df["current_roaming_enabled"] & ~df["charge_indication_disabled"]


def _checked_sub_at_risk(df: pd.DataFrame) -> pd.Series:
    return ((df["checked_sub_id"] == DDS) & df["sub1_at_risk"]) | (
        (df["checked_sub_id"] == NDDS) & df["sub2_at_risk"]
    )


# Each check returns a mask of violating rows; expected count is 0.
CHECKS: list[dict[str, object]] = [
    {
        "id": "A",
        "name": "enable_warning_precedence",
        "description": "turning roaming on without suppression always warns about charges",
        "violations": lambda df: _enable_warning_case(df)
        & ~((df["kind"] == _CONFIRM) & (df["dialog_type"] == _ENABLE_DIALOG)),
    },
    {
        "id": "B",
        "name": "ownership_exclusion",
        "description": "multi-SIM C_IWLAN and target != DDS is NOT_APPLICABLE outside the enable warning",
        "violations": lambda df: df["multi_sim_ciwlan_supported"]
        & (df["target_sub_id"] != DDS)
        & ~_enable_warning_case(df)
        & (df["kind"] != _NOT_APPLICABLE),
    },
    {
        "id": "C",
        "name": "not_applicable_only_with_multi_sim",
        "description": "NOT_APPLICABLE never appears without multi-SIM C_IWLAN support",
        "violations": lambda df: ~df["multi_sim_ciwlan_supported"] & (df["kind"] == _NOT_APPLICABLE),
    },
    {
        "id": "D",
        "name": "drop_warning_requires_roaming",
        "description": "C_IWLAN call-drop dialog only while camped on a roaming network",
        "violations": lambda df: (df["dialog_type"] == _DROP_DIALOG) & ~df["is_roaming_now"],
    },
    {
        "id": "E",
        "name": "drop_warning_requires_call_at_risk",
        "description": "C_IWLAN call-drop dialog only when the checked subscription has a call at risk",
        "violations": lambda df: (df["dialog_type"] == _DROP_DIALOG) & ~_checked_sub_at_risk(df),
    },
    {
        "id": "F",
        "name": "redirect_only_with_multi_sim",
        "description": "nDDS is only checked when multi-SIM C_IWLAN is supported",
        "violations": lambda df: (df["checked_sub_id"] == NDDS) & ~df["multi_sim_ciwlan_supported"],
    },
    {
        "id": "G",
        "name": "missed_drop_warning",
        "description": "DDS toggle while roaming with the checked sub at risk must warn",
        "violations": lambda df: df["is_roaming_now"]
        & (df["target_sub_id"] == DDS)
        & ~_enable_warning_case(df)
        & _checked_sub_at_risk(df)
        & (df["dialog_type"] != _DROP_DIALOG),
    },
    {
        "id": "H",
        "name": "deterministic",
        "description": "re-evaluating the same input yields the same decision",
        "violations": lambda df: ~df["repeat_matches"],
    },
]


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit roaming toggle decisions over all flag combinations")
    parser.add_argument("--policy-id", default="roaming", help="Policy id in the policy factory")
    parser.add_argument("--policy-version", default="v1", help="Policy version in the policy factory")
    parser.add_argument("--csv", default=None, help="Write the full decision table to this CSV path")
    parser.add_argument("--fail-fast", action="store_true", help="Stop after first failure")
    parser.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    return parser.parse_args(argv)


def _subscription(sub_id: int, bits: tuple[bool, ...]) -> SubscriptionState:
    return SubscriptionState(sub_id, **dict(zip(_SUB_FLAGS, bits)))


def build_decision_table(policy: RoamingPolicy) -> pd.DataFrame:
    rows = []
    flag_space = list(itertools.product((False, True), repeat=len(_SUB_FLAGS)))
    for input_bits in itertools.product((False, True), repeat=len(_INPUT_FLAGS)):
        flags = dict(zip(_INPUT_FLAGS, input_bits))
        for target in (DDS, NDDS):
            for sub1_bits in flag_space:
                sub1 = _subscription(DDS, sub1_bits)
                for sub2_bits in flag_space:
                    sub2 = _subscription(NDDS, sub2_bits)
                    inp = RoamingDecisionInput(
                        target_sub_id=target,
                        default_data_sub_id=DDS,
                        non_default_data_sub_id=NDDS,
                        subscriptions={DDS: sub1, NDDS: sub2},
                        **flags,
                    )
                    decision = decide(inp, policy)
                    row: dict[str, object] = dict(flags)
                    row["target_sub_id"] = target
                    for name, value in zip(_SUB_FLAGS, sub1_bits):
                        row[f"sub1_{name}"] = value
                    for name, value in zip(_SUB_FLAGS, sub2_bits):
                        row[f"sub2_{name}"] = value
                    row["sub1_at_risk"] = sub1.ciwlan_call_at_risk()
                    row["sub2_at_risk"] = sub2.ciwlan_call_at_risk()
                    row["kind"] = decision.kind.value
                    row["dialog_type"] = decision.dialog_type.value if decision.dialog_type else ""
                    row["checked_sub_id"] = decision.checked_sub_id if decision.checked_sub_id is not None else -1
                    row["reasons"] = "|".join(r.value for r in decision.reasons)
                    row["repeat_matches"] = decide(inp, policy) == decision
                    rows.append(row)
    return pd.DataFrame(rows)


def run_checks(df: pd.DataFrame, fail_fast: bool) -> list[dict[str, object]]:
    results = []
    fail_fast_triggered = False
    for chk in CHECKS:
        if fail_fast and fail_fast_triggered:
            results.append({"id": chk["id"], "name": chk["name"], "expected": 0, "observed": None, "status": "SKIPPED"})
            continue
        violations: Callable[[pd.DataFrame], pd.Series] = chk["violations"]  # type: ignore[assignment]
        observed = int(violations(df).sum())
        status = "PASS" if observed == 0 else "FAIL"
        if status == "FAIL" and fail_fast:
            fail_fast_triggered = True
        results.append({"id": chk["id"], "name": chk["name"], "expected": 0, "observed": observed, "status": status})
    return results


def summarize(df: pd.DataFrame) -> dict[str, int]:
    counts = df.groupby(["kind", "dialog_type"]).size()
    summary: dict[str, int] = {}
    for (kind, dialog), count in counts.items():
        label = f"{kind}:{dialog}" if dialog else kind
        summary[label] = int(count)
    return summary


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    try:
        policy = default_policy_factory.create(args.policy_id, args.policy_version)
        df = build_decision_table(policy)
        if args.csv:
            df.to_csv(args.csv, index=False)
        results = run_checks(df, args.fail_fast)
    except Exception as exc:
        if args.json:
            print(json.dumps({"timestamp": timestamp, "overall": "ERROR", "exit_code": 1, "error": str(exc)}))
        else:
            print(f"Timestamp: {timestamp}")
            print(f"ERROR: {exc}")
            print("exit_code=1")
        return 1

    failed_checks = sum(1 for res in results if res["status"] == "FAIL")
    overall = "PASS" if failed_checks == 0 else "FAIL"
    exit_code = 0 if failed_checks == 0 else 2
    summary = summarize(df)

    if args.json:
        payload = {
            "timestamp": timestamp,
            "policy": f"{args.policy_id}:{args.policy_version}",
            "rows": len(df),
            "summary": summary,
            "checks": results,
            "overall": overall,
            "failed_checks": failed_checks,
            "exit_code": exit_code,
        }
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(f"Timestamp: {timestamp}")
        print(f"Policy: {args.policy_id}:{args.policy_version}")
        print(f"rows: {len(df)}")
        print("SUMMARY:")
        for label, count in summary.items():
            print(f"  {label}: {count}")
        print("CHECKS:")
        for chk, res in zip(CHECKS, results):
            if res["status"] == "SKIPPED":
                print(f"  [{res['id']}] {chk['name']}: SKIPPED (fail-fast)")
                continue
            print(f"  [{res['id']}] {chk['name']}: {res['status']} (observed={res['observed']}, expected=0)")
            print(f"       {chk['description']}")
        print(f"OVERALL: {overall}")
        print(f"failed_checks: {failed_checks}")
        print(f"exit_code={exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
