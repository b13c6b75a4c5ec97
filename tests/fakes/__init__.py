"""Test doubles for fb."""
