# src/storage/__init__.py — v1
"""SQLite storage handle and analysis history."""
