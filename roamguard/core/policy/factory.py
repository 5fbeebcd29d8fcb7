from __future__ import annotations

from typing import Callable, Dict, Tuple

from roamguard.core.engine.evaluator import RoamingPolicy
from roamguard.core.policy.roaming_v1.policy import RoamingTogglePolicyV1


class PolicyFactory:
    def __init__(self) -> None:
        self._registry: Dict[Tuple[str, str], Callable[[], RoamingPolicy]] = {}

    def register(self, policy_id: str, policy_version: str, builder: Callable[[], RoamingPolicy]) -> None:
        self._registry[(policy_id, policy_version)] = builder

    def create(self, policy_id: str, policy_version: str) -> RoamingPolicy:
        key = (policy_id, policy_version)
        if key not in self._registry:
            raise ValueError(f"Unknown policy_id/version: {policy_id}:{policy_version}")
        return self._registry[key]()

    def registered(self) -> list[Tuple[str, str]]:
        return sorted(self._registry)


default_policy_factory = PolicyFactory()
default_policy_factory.register("roaming", "v1", lambda: RoamingTogglePolicyV1())

__all__ = ["PolicyFactory", "default_policy_factory"]
