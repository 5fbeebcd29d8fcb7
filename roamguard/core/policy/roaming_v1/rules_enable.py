"""Rules for the roaming enable path in roaming_v1.

Responsibilities:
  - Warn about carrier charges when roaming is being turned on.
Must not:
  - Look at C_IWLAN state; the charge warning ignores per-subscription flags.
Key definitions:
  - rule_enable_charge_warning.
"""

from __future__ import annotations

from typing import Optional

from roamguard.core.domain.enums import DialogType, ReasonCode
from roamguard.core.domain.models import RoamingDecision, RoamingDecisionInput
from .rules_common import is_enable_request


def rule_enable_charge_warning(inp: RoamingDecisionInput) -> Optional[RoamingDecision]:
    if is_enable_request(inp) and not inp.charge_indication_disabled:
        return RoamingDecision.require_confirmation(
            DialogType.ENABLE_ROAMING_CHARGE_WARNING,
            reasons=(ReasonCode.ENABLE_CHARGE_WARNING,),
        )
    return None
