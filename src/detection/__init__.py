# src/detection/__init__.py — v1
"""Face detectors backed by OpenCV."""
