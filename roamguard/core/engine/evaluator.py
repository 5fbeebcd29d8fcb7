"""Roaming toggle decision for a single user interaction.

Responsibilities:
  - Validate the decision snapshot against the subscription ids it references.
  - Apply the roaming policy deterministically and return its decision.

Inputs/Outputs:
  - Inputs: RoamingDecisionInput and an optional RoamingPolicy.
  - Outputs: RoamingDecision (apply directly, require confirmation, not applicable).

Invariants:
  - Must not read telephony state; the snapshot is assembled by the caller.
  - Must remain deterministic; the only module state is the debug hook.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from ..domain.errors import InvalidInputError
from ..domain.models import RoamingDecision, RoamingDecisionInput, is_valid_subscription_id
from ..policy.roaming_v1.policy import RoamingTogglePolicyV1

_DEBUG_FN: Callable[[str], None] | None = None

_DEFAULT_POLICY = RoamingTogglePolicyV1()


def set_decision_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


class RoamingPolicy(Protocol):
    def decide(self, inp: RoamingDecisionInput) -> RoamingDecision:
        ...


def validate_input(inp: RoamingDecisionInput) -> None:
    for role, sub_id in (
        ("target_sub_id", inp.target_sub_id),
        ("default_data_sub_id", inp.default_data_sub_id),
        ("non_default_data_sub_id", inp.non_default_data_sub_id),
    ):
        if is_valid_subscription_id(sub_id) and sub_id not in inp.subscriptions:
            raise InvalidInputError(f"Missing SubscriptionState for {role}={sub_id}")

    for key, state in inp.subscriptions.items():
        if state.subscription_id != key:
            raise InvalidInputError(
                f"SubscriptionState keyed as {key} has subscription_id={state.subscription_id}"
            )


def decide(inp: RoamingDecisionInput, policy: Optional[RoamingPolicy] = None) -> RoamingDecision:
    validate_input(inp)
    decision = (policy or _DEFAULT_POLICY).decide(inp)

    if _DEBUG_FN is not None:
        dialog = decision.dialog_type.value if decision.dialog_type is not None else "-"
        _DEBUG_FN(
            "DECISION "
            f"target={inp.target_sub_id} dds={inp.default_data_sub_id} "
            f"ndds={inp.non_default_data_sub_id} sub_to_check={decision.checked_sub_id} "
            f"kind={decision.kind.value} dialog={dialog} "
            f"reasons={[r.value for r in decision.reasons]}"
        )

    return decision
