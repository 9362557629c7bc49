"""Structured errors raised by the mesh container and the bevel pipeline."""

from __future__ import annotations


class BevelError(Exception):
    """Base class for every error raised by polybevel."""


class InvalidFaceError(BevelError, ValueError):
    """A face is not a planar, convex polygon of at least three distinct vertices."""


class InconsistentWindingError(InvalidFaceError):
    """Two faces traverse the same edge in the same direction."""


class RadiusTooLargeError(BevelError, ValueError):
    """The bevel radius does not fit the mesh it is applied to."""
