"""Shared helpers for path2enum."""
