"""Utilities shared across the test suite."""
