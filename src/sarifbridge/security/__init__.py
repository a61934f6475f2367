"""Credential handling helpers."""
