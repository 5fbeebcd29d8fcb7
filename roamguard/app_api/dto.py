"""DTO definitions for controller-level data exchange.

Responsibilities:
  - Define stable, typed structures exchanged between the controller facade,
    its telephony ports, and the UI layer.
Must not:
  - Implement business logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from roamguard.core.domain.enums import DialogType
from roamguard.core.domain.models import INVALID_SUBSCRIPTION_ID, RoamingDecision, SubscriptionState


class AvailabilityStatus(Enum):
    AVAILABLE = "AVAILABLE"
    AVAILABLE_UNSEARCHABLE = "AVAILABLE_UNSEARCHABLE"
    CONDITIONALLY_UNAVAILABLE = "CONDITIONALLY_UNAVAILABLE"


SUMMARY_DDS_ROAMING_UNAVAILABLE = "dds_roaming_unavailable"


@dataclass(frozen=True)
class CarrierConfig:
    force_home_network: bool = False
    disable_charge_indication: bool = False


@dataclass(frozen=True)
class TelephonySnapshot:
    """Point-in-time telephony view gathered for one controller instance."""
    current_roaming_enabled: bool
    is_roaming_now: bool
    default_data_sub_id: Optional[int] = INVALID_SUBSCRIPTION_ID
    non_default_data_sub_id: Optional[int] = INVALID_SUBSCRIPTION_ID
    multi_sim_ciwlan_supported: bool = False
    carrier_config: Optional[CarrierConfig] = None
    subscriptions: Mapping[int, SubscriptionState] = field(default_factory=dict)


@dataclass(frozen=True)
class SwitchState:
    enabled: bool
    checked: bool
    summary_key: Optional[str] = None


@dataclass(frozen=True)
class ToggleOutcome:
    decision: RoamingDecision
    applied: bool
    pending_dialog: Optional[DialogType] = None
