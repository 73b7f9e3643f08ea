# src/llm/__init__.py — v1
"""Remote inference client and failure classification."""
