"""
Test suite for sophie-prng

Contains:
- tests/unit/          : Unit tests for individual modules
"""
