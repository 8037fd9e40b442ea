"""Canned kubectl outputs for tests."""
