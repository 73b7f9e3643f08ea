# src/resolver/__init__.py — v1
"""Fallback state machine that resolves analysis requests."""
