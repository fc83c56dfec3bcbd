"""Cross-asset color comparison."""

from .delta_calculator import ColorDelta, DeltaStatus, calculate_deltas, classify_delta

__all__ = ["ColorDelta", "DeltaStatus", "calculate_deltas", "classify_delta"]
