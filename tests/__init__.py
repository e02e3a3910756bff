"""
Test suite for datemath

Contains:
- tests/unit/          : Unit tests for individual modules
"""
