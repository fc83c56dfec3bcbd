"""Core color models."""

from .color import LAB, RGB

__all__ = ["LAB", "RGB"]
