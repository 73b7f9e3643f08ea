# src/__init__.py — v1
"""facetier: tiered face analysis with cache, remote, local and simulated tiers."""
