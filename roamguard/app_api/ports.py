"""Port definitions for controller-level dependencies.

Responsibilities:
  - Define interface contracts for telephony state gathering and roaming writes.
Must not:
  - Implement logic; interfaces only.
"""

from __future__ import annotations

from typing import Protocol

from .dto import TelephonySnapshot


class TelephonyStateProvider(Protocol):
    def snapshot(self, sub_id: int) -> TelephonySnapshot:
        ...


class RoamingSetter(Protocol):
    def set_data_roaming_enabled(self, sub_id: int, enabled: bool) -> None:
        ...
