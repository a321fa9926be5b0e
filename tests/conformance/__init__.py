"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the client ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_amount_exactness.py - Fixed-point parsing, formatting and arithmetic
2. test_replay.py - Snapshot derivation from account history

These tests use hypothesis for property-based testing.
"""
