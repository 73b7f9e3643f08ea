# src/core/__init__.py — v1
"""Shared result models and payload codec."""
