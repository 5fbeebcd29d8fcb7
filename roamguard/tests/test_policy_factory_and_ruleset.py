"""Tests for policy factory wiring and rule set behavior."""

from __future__ import annotations

import pytest

from roamguard.core.domain.enums import DecisionKind, DialogType
from roamguard.core.domain.models import RoamingDecision, RoamingDecisionInput, SubscriptionState
from roamguard.core.engine.evaluator import decide
from roamguard.core.policy.factory import PolicyFactory, default_policy_factory
from roamguard.core.policy.roaming_v1.policy import (
    RoamingTogglePolicyV1,
    RuleSet,
    apply_ruleset,
    build_ruleset_roaming_v1,
)
from roamguard.core.policy.roaming_v1.rules_common import first_match, resolve_sub_to_check
from roamguard.core.policy.roaming_v1.rules_enable import rule_enable_charge_warning


def mk_input(**overrides) -> RoamingDecisionInput:
    fields = dict(
        target_sub_id=1,
        requested_enable=False,
        current_roaming_enabled=True,
        is_roaming_now=True,
        default_data_sub_id=1,
        non_default_data_sub_id=2,
        subscriptions={1: SubscriptionState(1), 2: SubscriptionState(2)},
    )
    fields.update(overrides)
    return RoamingDecisionInput(**fields)


def test_first_match_returns_none_when_no_rule_fires():
    assert first_match([rule_enable_charge_warning], mk_input()) is None


def test_apply_ruleset_enable_rules_precede_disable_rules():
    ruleset = build_ruleset_roaming_v1()
    inp = mk_input(target_sub_id=2, requested_enable=True, current_roaming_enabled=False, multi_sim_ciwlan_supported=True)
    decided = apply_ruleset(inp, ruleset)
    assert decided is not None
    assert decided.dialog_type == DialogType.ENABLE_ROAMING_CHARGE_WARNING


def test_resolve_sub_to_check_defaults_to_dds():
    sub = resolve_sub_to_check(mk_input(multi_sim_ciwlan_supported=True))
    assert sub.sub_id == 1
    assert sub.redirected is False


def test_policy_with_injected_ruleset():
    def always_not_applicable(inp):
        return RoamingDecision.not_applicable()

    policy = RoamingTogglePolicyV1(RuleSet(enable_rules=[], disable_rules=[always_not_applicable]))
    assert decide(mk_input(), policy).kind == DecisionKind.NOT_APPLICABLE


def test_empty_ruleset_falls_back_to_apply_directly():
    policy = RoamingTogglePolicyV1(RuleSet(enable_rules=[], disable_rules=[]))
    inp = mk_input(requested_enable=True, current_roaming_enabled=False)
    assert policy.decide(inp).kind == DecisionKind.APPLY_DIRECTLY


def test_factory_returns_policy_and_errors_on_unknown():
    factory = PolicyFactory()
    factory.register("roaming", "dev", lambda: RoamingTogglePolicyV1())
    policy = factory.create("roaming", "dev")
    assert isinstance(policy, RoamingTogglePolicyV1)
    with pytest.raises(ValueError):
        factory.create("unknown", "v0")


def test_default_factory_registrations():
    assert default_policy_factory.registered() == [("roaming", "v1")]
    assert isinstance(default_policy_factory.create("roaming", "v1"), RoamingTogglePolicyV1)
