"""Sketch Plan - freehand floor plan stroke-to-graph vectorization."""

__version__ = "0.1.0"
