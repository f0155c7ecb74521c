# tests/fixtures/__init__.py
"""Shared sample types for contractcheck tests."""
