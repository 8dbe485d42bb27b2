"""
Test suite for the insurance ledger

Contains:
- tests/unit/          : Unit tests for individual modules and ledger scenarios
"""
