from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from roamguard.core.domain.models import RoamingDecision, RoamingDecisionInput, is_valid_subscription_id
from .rules_common import fallback_reasons, first_match, resolve_sub_to_check
from .rules_disable import rule_ciwlan_call_drop, rule_not_default_data_owner
from .rules_enable import rule_enable_charge_warning
from .types import Rule


@dataclass(frozen=True)
class RuleSet:
    enable_rules: List[Rule]
    disable_rules: List[Rule]


def apply_ruleset(inp: RoamingDecisionInput, ruleset: RuleSet) -> Optional[RoamingDecision]:
    # Ordered precedence: enable warning > ownership > C_IWLAN call drop
    decided = first_match(ruleset.enable_rules, inp)
    if decided:
        return decided
    return first_match(ruleset.disable_rules, inp)


def build_ruleset_roaming_v1() -> RuleSet:
    return RuleSet(
        enable_rules=[rule_enable_charge_warning],
        disable_rules=[rule_not_default_data_owner, rule_ciwlan_call_drop],
    )


class RoamingTogglePolicyV1:
    def __init__(self, ruleset: Optional[RuleSet] = None) -> None:
        self._ruleset = ruleset or build_ruleset_roaming_v1()

    def decide(self, inp: RoamingDecisionInput) -> RoamingDecision:
        decided = apply_ruleset(inp, self._ruleset)
        if decided is not None:
            return decided

        checked_sub_id: Optional[int] = None
        if inp.is_roaming_now:
            sub_id = resolve_sub_to_check(inp).sub_id
            if is_valid_subscription_id(sub_id):
                checked_sub_id = sub_id
        return RoamingDecision.apply_directly(
            reasons=fallback_reasons(inp),
            checked_sub_id=checked_sub_id,
        )
