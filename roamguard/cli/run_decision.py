"""Evaluate one roaming toggle snapshot and print the decision.

Purpose:
  - Reproduce a controller decision offline from a captured telephony snapshot.
Inputs:
  - --snapshot JSON file (see roamguard.app_api.snapshot_config).
Outputs:
  - Decision kind, dialog type, checked subscription and reasons on stdout.
Example:
  - PYTHONPATH=. python3 roamguard/cli/run_decision.py --snapshot snap.json --json
"""

from __future__ import annotations

import argparse
import json
import sys

from roamguard.app_api.snapshot_config import load_snapshot
from roamguard.core.domain.enums import REASON_METADATA
from roamguard.core.engine.evaluator import decide, set_decision_debug
from roamguard.core.policy.factory import default_policy_factory
from roamguard.cli._debug_utils import _dbg, _debug_enabled


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a roaming toggle decision snapshot")
    parser.add_argument("--snapshot", required=True, help="Path to snapshot JSON")
    parser.add_argument("--policy-id", default="roaming", help="Policy id in the policy factory")
    parser.add_argument("--policy-version", default="v1", help="Policy version in the policy factory")
    parser.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    parser.add_argument("--debug", action="store_true", help="Print decision trace")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if _debug_enabled(args):
        set_decision_debug(lambda msg: _dbg(args, msg))
    try:
        policy = default_policy_factory.create(args.policy_id, args.policy_version)
        inp = load_snapshot(args.snapshot)
        _dbg(args, f"loaded snapshot subs={sorted(inp.subscriptions)}")
        decision = decide(inp, policy)
    except ValueError as exc:
        if args.json:
            print(json.dumps({"snapshot": args.snapshot, "error": str(exc), "exit_code": 1}))
        else:
            print(f"ERROR: {exc}")
            print("exit_code=1")
        return 1
    finally:
        set_decision_debug(None)

    dialog = decision.dialog_type.value if decision.dialog_type is not None else None
    if args.json:
        payload = {
            "snapshot": args.snapshot,
            "kind": decision.kind.value,
            "dialog_type": dialog,
            "checked_sub_id": decision.checked_sub_id,
            "reasons": [r.value for r in decision.reasons],
            "exit_code": 0,
        }
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(f"Snapshot: {args.snapshot}")
        print(f"DECISION: {decision.kind.value}")
        if dialog is not None:
            print(f"dialog_type: {dialog}")
        print(f"checked_sub_id: {decision.checked_sub_id}")
        print("REASONS:")
        for reason in decision.reasons:
            print(f"  {reason.value}: {REASON_METADATA[reason]['message']}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
