"""Bevel configuration.

Usage
-----
>>> from polybevel import Model, CUBON_BEVEL
>>> model.round(0.05, config=CUBON_BEVEL)
"""

from __future__ import annotations

from dataclasses import dataclass

EDGE_SEGMENTS = 3
CORNER_SEGMENTS = 3


@dataclass(frozen=True)
class RoundingConfig:
    """Tuneable parameters for :meth:`Model.round`.

    Attributes
    ----------
    edge_segments : int
        Quads per edge fillet.  Constant, not derived from the dihedral
        angle or the radius.
    corner_segments : int
        Rings per corner patch.  Must not exceed *edge_segments*, since
        every ring is one point shorter than the rail it closes on.
    validate : bool
        Check preconditions (radius against edge lengths, flipped caps)
        and raise instead of emitting broken geometry.
    degenerate_tolerance : float
        Inset intersections whose ``|d0 x d1|^2`` falls at or below this
        use the midpoint of the two offset points.
    planarity_tolerance : float
        Relative tolerance for the planarity and convexity checks of
        :meth:`Model.add_face`.
    """

    edge_segments: int = EDGE_SEGMENTS
    corner_segments: int = CORNER_SEGMENTS
    validate: bool = True
    degenerate_tolerance: float = 1e-12
    planarity_tolerance: float = 1e-6

    def check(self) -> None:
        if self.edge_segments < 1:
            raise ValueError("edge_segments must be >= 1")
        if self.corner_segments < 1:
            raise ValueError("corner_segments must be >= 1")
        if self.corner_segments > self.edge_segments:
            raise ValueError("corner_segments must be <= edge_segments")
        if self.degenerate_tolerance < 0.0:
            raise ValueError("degenerate_tolerance must be >= 0")


DEFAULT_ROUNDING = RoundingConfig()

# The cube pieces were tuned against 3 fillet quads and 3 corner rings.
CUBON_BEVEL = RoundingConfig(edge_segments=3, corner_segments=3)
CUBON_RADIUS = 0.05
