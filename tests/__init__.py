"""
Test suite for chronos

Contains:
- tests/unit/          : Unit tests for individual modules
"""
