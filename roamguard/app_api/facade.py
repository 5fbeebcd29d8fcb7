from __future__ import annotations

from typing import Callable, Optional

from roamguard.core.domain.enums import DecisionKind, DialogType
from roamguard.core.domain.models import RoamingDecisionInput, is_valid_subscription_id
from roamguard.core.engine.evaluator import RoamingPolicy, decide
from .dto import (
    SUMMARY_DDS_ROAMING_UNAVAILABLE,
    AvailabilityStatus,
    CarrierConfig,
    SwitchState,
    TelephonySnapshot,
    ToggleOutcome,
)
from .ports import RoamingSetter, TelephonyStateProvider


def availability_status(sub_id: Optional[int], carrier_config: Optional[CarrierConfig]) -> AvailabilityStatus:
    if carrier_config is not None and carrier_config.force_home_network:
        return AvailabilityStatus.CONDITIONALLY_UNAVAILABLE
    if not is_valid_subscription_id(sub_id):
        return AvailabilityStatus.AVAILABLE_UNSEARCHABLE
    return AvailabilityStatus.AVAILABLE


def build_decision_input(
    sub_id: Optional[int], requested_enable: bool, snapshot: TelephonySnapshot
) -> RoamingDecisionInput:
    config = snapshot.carrier_config or CarrierConfig()
    return RoamingDecisionInput(
        target_sub_id=sub_id,
        requested_enable=requested_enable,
        current_roaming_enabled=snapshot.current_roaming_enabled,
        is_roaming_now=snapshot.is_roaming_now,
        default_data_sub_id=snapshot.default_data_sub_id,
        non_default_data_sub_id=snapshot.non_default_data_sub_id,
        multi_sim_ciwlan_supported=snapshot.multi_sim_ciwlan_supported,
        charge_indication_disabled=config.disable_charge_indication,
        subscriptions=snapshot.subscriptions,
    )


def ndds_call_blocks_dds_roaming(sub_id: Optional[int], snapshot: TelephonySnapshot) -> bool:
    """True on the DDS instance while the nDDS has an ongoing voice call."""
    if not is_valid_subscription_id(sub_id) or sub_id != snapshot.default_data_sub_id:
        return False
    ndds = snapshot.non_default_data_sub_id
    if not is_valid_subscription_id(ndds) or ndds == sub_id:
        return False
    state = snapshot.subscriptions.get(ndds)
    return state is not None and state.in_call


class RoamingToggleController:
    def __init__(
        self,
        sub_id: Optional[int],
        state_provider: TelephonyStateProvider,
        roaming_setter: RoamingSetter,
        policy: Optional[RoamingPolicy] = None,
        debug_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._sub_id = sub_id
        self._state_provider = state_provider
        self._roaming_setter = roaming_setter
        self._policy = policy
        self._debug_fn = debug_fn
        self._pending_enable: Optional[bool] = None
        self._pending_dialog: Optional[DialogType] = None

    @property
    def sub_id(self) -> Optional[int]:
        return self._sub_id

    @property
    def pending_dialog(self) -> Optional[DialogType]:
        return self._pending_dialog

    def _dbg(self, msg: str) -> None:
        if self._debug_fn is not None:
            self._debug_fn(msg)

    def availability_status(self) -> AvailabilityStatus:
        snapshot = self._state_provider.snapshot(self._sub_id)
        return availability_status(self._sub_id, snapshot.carrier_config)

    def is_checked(self) -> bool:
        if not is_valid_subscription_id(self._sub_id):
            return False
        return self._state_provider.snapshot(self._sub_id).current_roaming_enabled

    def switch_state(self, disabled_by_admin: bool = False) -> SwitchState:
        if not is_valid_subscription_id(self._sub_id):
            return SwitchState(enabled=False, checked=False)
        snapshot = self._state_provider.snapshot(self._sub_id)
        checked = snapshot.current_roaming_enabled
        if disabled_by_admin:
            return SwitchState(enabled=False, checked=checked)
        if checked and ndds_call_blocks_dds_roaming(self._sub_id, snapshot):
            self._dbg("nDDS voice call ongoing; DDS data roaming cannot be turned off")
            return SwitchState(enabled=False, checked=True, summary_key=SUMMARY_DDS_ROAMING_UNAVAILABLE)
        return SwitchState(enabled=True, checked=checked)

    def set_checked(self, checked: bool) -> ToggleOutcome:
        snapshot = self._state_provider.snapshot(self._sub_id)
        decision = decide(build_decision_input(self._sub_id, checked, snapshot), self._policy)

        if decision.kind == DecisionKind.REQUIRE_CONFIRMATION:
            self._pending_enable = checked
            self._pending_dialog = decision.dialog_type
            self._dbg(f"sub={self._sub_id} dialog requested: {decision.dialog_type.value}")
            return ToggleOutcome(decision=decision, applied=False, pending_dialog=decision.dialog_type)

        self._clear_pending()
        applied = self._apply(checked)
        return ToggleOutcome(decision=decision, applied=applied)

    def confirm_dialog(self) -> bool:
        if self._pending_enable is None:
            return False
        enabled = self._pending_enable
        self._clear_pending()
        return self._apply(enabled)

    def cancel_dialog(self) -> None:
        self._clear_pending()

    def on_data_roaming_changed(self, sub_id: int, enabled: bool) -> Optional[SwitchState]:
        """Refresh the switch after a roaming setting change; other subscriptions are ignored."""
        if sub_id != self._sub_id:
            self._dbg(f"onDataRoamingChanged - wrong subId : {sub_id} / {enabled}")
            return None
        return self.switch_state()

    def _apply(self, enabled: bool) -> bool:
        if not is_valid_subscription_id(self._sub_id):
            return False
        self._roaming_setter.set_data_roaming_enabled(self._sub_id, enabled)
        return True

    def _clear_pending(self) -> None:
        self._pending_enable = None
        self._pending_dialog = None
