"""Shared type definitions for roaming_v1 policy rules.

Responsibilities:
  - Define the Rule callable signature and the SubToCheck carrier.
Must not:
  - Implement logic; data-only types for rule evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from roamguard.core.domain.models import RoamingDecision, RoamingDecisionInput

Rule = Callable[[RoamingDecisionInput], Optional[RoamingDecision]]


@dataclass(frozen=True)
class SubToCheck:
    sub_id: Optional[int]
    redirected: bool
