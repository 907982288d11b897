"""
Test suite for the points ledger

Contains:
- tests/unit/          : Unit tests for domain, store, lifecycle, transfers
"""
