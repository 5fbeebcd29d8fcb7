"""Rules for the roaming disable path in roaming_v1.

Responsibilities:
  - Exclude non-DDS instances when multi-SIM C_IWLAN is supported.
  - Warn when disabling roaming would drop a call carried over C_IWLAN.
Must not:
  - Look up invalid subscription ids; those conditions count as false.
Key definitions:
  - rule_not_default_data_owner, rule_ciwlan_call_drop.
"""

from __future__ import annotations

from typing import Optional

from roamguard.core.domain.enums import DialogType, ReasonCode
from roamguard.core.domain.models import RoamingDecision, RoamingDecisionInput
from .rules_common import owns_ciwlan_warning, resolve_sub_to_check


def rule_not_default_data_owner(inp: RoamingDecisionInput) -> Optional[RoamingDecision]:
    if owns_ciwlan_warning(inp):
        return None
    return RoamingDecision.not_applicable(reasons=(ReasonCode.NOT_DEFAULT_DATA_OWNER,))


def rule_ciwlan_call_drop(inp: RoamingDecisionInput) -> Optional[RoamingDecision]:
    if not inp.is_roaming_now:
        return None

    sub = resolve_sub_to_check(inp)
    state = inp.state_for(sub.sub_id)
    if state is None or not state.ciwlan_call_at_risk():
        return None

    reasons = [ReasonCode.CIWLAN_CALL_AT_RISK]
    if sub.redirected:
        reasons.insert(0, ReasonCode.CROSS_CHECK_REDIRECTED)
    return RoamingDecision.require_confirmation(
        DialogType.DISABLE_ROAMING_DROPS_CIWLAN_CALL,
        reasons=tuple(reasons),
        checked_sub_id=sub.sub_id,
    )
