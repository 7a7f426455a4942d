"""
Test suite for cas-interchange

Contains:
- tests/unit/   : Unit tests for individual modules
- conftest.py   : Shared fixtures (recording fake kernel, sample trees)
"""
