"""Domain enums for roaming toggle decisions.

Responsibilities:
  - Define decision kinds, dialog types, and audit reason codes.
  - Provide stable reason categories and audit metadata.

Invariants:
  - Enum values must remain stable; CLI output and audit tables use them.
  - ReasonCode metadata must be complete and deterministic.
"""

from __future__ import annotations

from enum import Enum


class DecisionKind(Enum):
    APPLY_DIRECTLY = "APPLY_DIRECTLY"
    REQUIRE_CONFIRMATION = "REQUIRE_CONFIRMATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class DialogType(Enum):
    ENABLE_ROAMING_CHARGE_WARNING = "ENABLE_ROAMING_CHARGE_WARNING"
    DISABLE_ROAMING_DROPS_CIWLAN_CALL = "DISABLE_ROAMING_DROPS_CIWLAN_CALL"


class ReasonCategory(Enum):
    WARNING = "WARNING"
    EXCLUSION = "EXCLUSION"
    INFO = "INFO"


# Stable identifiers for decision reasoning; value is the printed code.
class ReasonCode(Enum):
    ENABLE_CHARGE_WARNING = "ENABLE_CHARGE_WARNING"
    CHARGE_INDICATION_SUPPRESSED = "CHARGE_INDICATION_SUPPRESSED"
    NOT_DEFAULT_DATA_OWNER = "NOT_DEFAULT_DATA_OWNER"
    NOT_ROAMING = "NOT_ROAMING"
    NOT_IN_CALL = "NOT_IN_CALL"
    CIWLAN_NOT_EXCLUSIVE = "CIWLAN_NOT_EXCLUSIVE"
    IMS_NOT_ON_CIWLAN = "IMS_NOT_ON_CIWLAN"
    CIWLAN_CALL_AT_RISK = "CIWLAN_CALL_AT_RISK"
    CROSS_CHECK_REDIRECTED = "CROSS_CHECK_REDIRECTED"
    INVALID_SUB_SKIPPED = "INVALID_SUB_SKIPPED"
    NO_WARNING_NEEDED = "NO_WARNING_NEEDED"


# UI/audit metadata keyed by reason code.
REASON_METADATA: dict[ReasonCode, dict[str, object]] = {
    ReasonCode.ENABLE_CHARGE_WARNING: {
        "category": ReasonCategory.WARNING,
        "message": "Turning roaming on may incur carrier charges.",
    },
    ReasonCode.CHARGE_INDICATION_SUPPRESSED: {
        "category": ReasonCategory.INFO,
        "message": "Carrier config disables the roaming charge indication.",
    },
    ReasonCode.NOT_DEFAULT_DATA_OWNER: {
        "category": ReasonCategory.EXCLUSION,
        "message": "Only the default data subscription evaluates the cross-SIM warning.",
    },
    ReasonCode.NOT_ROAMING: {
        "category": ReasonCategory.INFO,
        "message": "Device is not camped on a roaming network.",
    },
    ReasonCode.NOT_IN_CALL: {
        "category": ReasonCategory.INFO,
        "message": "Checked subscription has no active voice call.",
    },
    ReasonCode.CIWLAN_NOT_EXCLUSIVE: {
        "category": ReasonCategory.INFO,
        "message": "C_IWLAN is disabled or not the exclusive transport.",
    },
    ReasonCode.IMS_NOT_ON_CIWLAN: {
        "category": ReasonCategory.INFO,
        "message": "IMS registration is not anchored on C_IWLAN.",
    },
    ReasonCode.CIWLAN_CALL_AT_RISK: {
        "category": ReasonCategory.WARNING,
        "message": "Disabling roaming will drop the ongoing C_IWLAN call.",
    },
    ReasonCode.CROSS_CHECK_REDIRECTED: {
        "category": ReasonCategory.INFO,
        "message": "Non-default data subscription call state was checked instead of the DDS.",
    },
    ReasonCode.INVALID_SUB_SKIPPED: {
        "category": ReasonCategory.INFO,
        "message": "Subscription to check is invalid; condition treated as false.",
    },
    ReasonCode.NO_WARNING_NEEDED: {
        "category": ReasonCategory.INFO,
        "message": "No confirmation is required; toggle is applied directly.",
    },
}


_missing = [rc for rc in ReasonCode if rc not in REASON_METADATA]
if _missing:
    raise RuntimeError(f"Missing REASON_METADATA for: {[m.value for m in _missing]}")

_extra = [k for k in REASON_METADATA.keys() if k not in set(ReasonCode)]
if _extra:
    raise RuntimeError(f"Extra REASON_METADATA keys: {[e.value for e in _extra]}")
