"""
Test suite for statlib

Contains:
- tests/unit/          : Unit tests for individual modules
"""
