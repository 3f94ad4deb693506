"""Copilot AI services."""
