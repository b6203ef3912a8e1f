"""Utility modules for recall."""
