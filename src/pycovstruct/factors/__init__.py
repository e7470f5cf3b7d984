"""Coordinate factors: categorical levels that carry numeric coordinates."""

from pycovstruct.factors._coord_factor import (
    CoordinateFactor,
    decode_levels,
    encode_coords,
    num_factor,
)

__all__ = ["CoordinateFactor", "encode_coords", "decode_levels", "num_factor"]
