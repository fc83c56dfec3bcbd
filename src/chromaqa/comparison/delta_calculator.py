"""
Compare colors between two extracted assets.

For every source color the perceptually closest target color is found with
CIEDE2000 and the pair is classified:
- match: distance <= 1, not perceptible
- similar: distance <= 5, perceptible on close observation
- different: a counterpart exists within 30
- missing: no target colors, or nothing within 30
"""

import math
from dataclasses import dataclass
from enum import Enum

from ..extraction.models import LocatedColor
from ..matching.delta_e import delta_e_2000, rgb_to_lab

MATCH_THRESHOLD = 1.0
SIMILAR_THRESHOLD = 5.0
MISSING_THRESHOLD = 30.0


class DeltaStatus(Enum):
    MATCH = "match"
    SIMILAR = "similar"
    DIFFERENT = "different"
    MISSING = "missing"


@dataclass
class ColorDelta:
    source_color: LocatedColor
    target_color: LocatedColor | None
    delta_e: float
    status: DeltaStatus


def classify_delta(delta_e: float) -> DeltaStatus:
    if delta_e > MISSING_THRESHOLD:
        return DeltaStatus.MISSING
    if delta_e <= MATCH_THRESHOLD:
        return DeltaStatus.MATCH
    if delta_e <= SIMILAR_THRESHOLD:
        return DeltaStatus.SIMILAR
    return DeltaStatus.DIFFERENT


def calculate_deltas(
    source_colors: list[LocatedColor], target_colors: list[LocatedColor]
) -> list[ColorDelta]:
    """Pair each source color with its closest target color."""
    target_labs = [(target, rgb_to_lab(target.rgb)) for target in target_colors]
    deltas = []

    for source in source_colors:
        source_lab = rgb_to_lab(source.rgb)
        best: LocatedColor | None = None
        best_delta = math.inf

        for target, target_lab in target_labs:
            delta = delta_e_2000(source_lab, target_lab)
            if delta < best_delta:
                best_delta = delta
                best = target

        deltas.append(
            ColorDelta(
                source_color=source,
                target_color=best,
                delta_e=best_delta,
                status=DeltaStatus.MISSING if best is None else classify_delta(best_delta),
            )
        )

    return deltas
