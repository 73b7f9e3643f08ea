# src/analysis/__init__.py — v1
"""Local heuristic scoring and simulated results."""
