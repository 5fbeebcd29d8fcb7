"""Domain models for roaming toggle decisions.

Responsibilities:
  - Define immutable data carriers for per-subscription telephony state,
    the decision input snapshot, and the decision result.

Inputs/Outputs:
  - RoamingDecisionInput is built by callers (controller facade, snapshot loader).
  - RoamingDecision is consumed by the UI layer and the audit CLI.

Invariants:
  - Models are point-in-time snapshots; nothing here is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .enums import DecisionKind, DialogType, ReasonCode

INVALID_SUBSCRIPTION_ID = -1


def is_valid_subscription_id(sub_id: Optional[int]) -> bool:
    return isinstance(sub_id, int) and not isinstance(sub_id, bool) and sub_id >= 0


def normalize_subscription_id(sub_id: Optional[int]) -> int:
    # None, negative ids and non-int values all collapse to the single invalid id.
    return sub_id if is_valid_subscription_id(sub_id) else INVALID_SUBSCRIPTION_ID


@dataclass(frozen=True)
class SubscriptionState:
    subscription_id: int
    in_call: bool = False
    ciwlan_mode_supported: bool = False
    ciwlan_enabled: bool = False
    in_ciwlan_only_mode: bool = False
    ims_registered_on_ciwlan: bool = False

    def ciwlan_exclusive(self) -> bool:
        # Without mode support C_IWLAN is the only transport whenever it is enabled.
        return self.ciwlan_enabled and (self.in_ciwlan_only_mode or not self.ciwlan_mode_supported)

    def ciwlan_call_at_risk(self) -> bool:
        """True when disabling roaming would drop an ongoing call carried over C_IWLAN."""
        return self.in_call and self.ciwlan_exclusive() and self.ims_registered_on_ciwlan


@dataclass(frozen=True)
class RoamingDecisionInput:
    target_sub_id: Optional[int]
    requested_enable: bool
    current_roaming_enabled: bool
    is_roaming_now: bool
    default_data_sub_id: Optional[int]
    non_default_data_sub_id: Optional[int]
    multi_sim_ciwlan_supported: bool = False
    charge_indication_disabled: bool = False
    subscriptions: Mapping[int, SubscriptionState] = field(default_factory=dict)

    # Read-only mapping field; equality is by value but the snapshot is not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in ("target_sub_id", "default_data_sub_id", "non_default_data_sub_id"):
            object.__setattr__(self, name, normalize_subscription_id(getattr(self, name)))
        object.__setattr__(self, "subscriptions", MappingProxyType(dict(self.subscriptions)))

    def state_for(self, sub_id: Optional[int]) -> Optional[SubscriptionState]:
        if not is_valid_subscription_id(sub_id):
            return None
        return self.subscriptions.get(sub_id)


@dataclass(frozen=True)
class RoamingDecision:
    kind: DecisionKind
    dialog_type: Optional[DialogType] = None
    reasons: tuple[ReasonCode, ...] = ()
    checked_sub_id: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.kind == DecisionKind.REQUIRE_CONFIRMATION) != (self.dialog_type is not None):
            raise ValueError("dialog_type must be set iff kind is REQUIRE_CONFIRMATION")

    @classmethod
    def apply_directly(
        cls, reasons: tuple[ReasonCode, ...] = (), checked_sub_id: Optional[int] = None
    ) -> "RoamingDecision":
        return cls(DecisionKind.APPLY_DIRECTLY, None, tuple(reasons), checked_sub_id)

    @classmethod
    def require_confirmation(
        cls,
        dialog_type: DialogType,
        reasons: tuple[ReasonCode, ...] = (),
        checked_sub_id: Optional[int] = None,
    ) -> "RoamingDecision":
        return cls(DecisionKind.REQUIRE_CONFIRMATION, dialog_type, tuple(reasons), checked_sub_id)

    @classmethod
    def not_applicable(cls, reasons: tuple[ReasonCode, ...] = ()) -> "RoamingDecision":
        return cls(DecisionKind.NOT_APPLICABLE, None, tuple(reasons), None)

    @property
    def needs_dialog(self) -> bool:
        return self.kind == DecisionKind.REQUIRE_CONFIRMATION
