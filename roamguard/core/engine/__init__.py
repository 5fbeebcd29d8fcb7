"""Core roaming decision evaluation utilities.

Responsibilities:
  - Provide the decide() entry point and snapshot validation.
  - Must not query telephony services directly; consumes precomputed snapshots.
"""
