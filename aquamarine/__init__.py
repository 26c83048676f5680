"""Aquamarine -- generates Go application skeletons from ``aquamarine.yaml``."""

__version__ = "0.1.0"
