"""Audit orchestration."""
