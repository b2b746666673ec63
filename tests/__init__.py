"""
Test suite for register-arithmetic

Contains:
- tests/unit/          : Unit tests for individual modules
"""
