from __future__ import annotations

from typing import Iterable, Optional

from roamguard.core.domain.enums import ReasonCode
from roamguard.core.domain.models import (
    RoamingDecision,
    RoamingDecisionInput,
    SubscriptionState,
    is_valid_subscription_id,
)
from .types import Rule, SubToCheck


def first_match(rules: Iterable[Rule], inp: RoamingDecisionInput) -> Optional[RoamingDecision]:
    for rule in rules:
        decided = rule(inp)
        if decided is not None:
            return decided
    return None


def is_enable_request(inp: RoamingDecisionInput) -> bool:
    return inp.requested_enable and not inp.current_roaming_enabled


def owns_ciwlan_warning(inp: RoamingDecisionInput) -> bool:
    if not inp.multi_sim_ciwlan_supported:
        return True
    # An invalid id never matches, not even another invalid id.
    if not is_valid_subscription_id(inp.target_sub_id):
        return False
    return inp.target_sub_id == inp.default_data_sub_id


def resolve_sub_to_check(inp: RoamingDecisionInput) -> SubToCheck:
    """Pick the subscription whose C_IWLAN call state guards the roaming toggle.

    Without multi-SIM C_IWLAN only the DDS is considered. With it, the nDDS is
    checked instead when it has a call at risk; a third subscription never is.
    """
    dds = inp.default_data_sub_id
    if not inp.multi_sim_ciwlan_supported:
        return SubToCheck(sub_id=dds, redirected=False)

    ndds_state = inp.state_for(inp.non_default_data_sub_id)
    if ndds_state is not None and ndds_state.ciwlan_call_at_risk():
        return SubToCheck(sub_id=inp.non_default_data_sub_id, redirected=True)
    return SubToCheck(sub_id=dds, redirected=False)


def explain_no_risk(state: Optional[SubscriptionState]) -> ReasonCode:
    # Order mirrors the short-circuit of SubscriptionState.ciwlan_call_at_risk.
    if state is None:
        return ReasonCode.INVALID_SUB_SKIPPED
    if not state.in_call:
        return ReasonCode.NOT_IN_CALL
    if not state.ciwlan_exclusive():
        return ReasonCode.CIWLAN_NOT_EXCLUSIVE
    if not state.ims_registered_on_ciwlan:
        return ReasonCode.IMS_NOT_ON_CIWLAN
    return ReasonCode.NO_WARNING_NEEDED


def fallback_reasons(inp: RoamingDecisionInput) -> tuple[ReasonCode, ...]:
    reasons: list[ReasonCode] = []
    if is_enable_request(inp) and inp.charge_indication_disabled:
        reasons.append(ReasonCode.CHARGE_INDICATION_SUPPRESSED)
    if not inp.is_roaming_now:
        reasons.append(ReasonCode.NOT_ROAMING)
        return tuple(reasons)

    sub = resolve_sub_to_check(inp)
    if not is_valid_subscription_id(sub.sub_id):
        reasons.append(ReasonCode.INVALID_SUB_SKIPPED)
        return tuple(reasons)
    reasons.append(explain_no_risk(inp.state_for(sub.sub_id)))
    return tuple(reasons)
