# src/network/__init__.py — v1
"""Connectivity probing."""
