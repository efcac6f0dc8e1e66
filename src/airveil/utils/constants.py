from __future__ import annotations

"""Earth model, tolerances and output defaults.

All values in internal units (meters, radians, seconds) unless otherwise noted.
"""

import math

from scipy import constants as sc

# --- Earth parameters ---
SPHERICAL_EARTH_RADIUS_M: float = sc.nautical_mile * 60.0 * 180.0 / math.pi
"""Radius of the spherical earth in m, chosen so that one arc-minute is one nautical mile."""

WGS84_EQUATORIAL_RADIUS_M: float = 6378137.0
"""WGS-84 equatorial radius in m, used by the flat-earth offset estimate."""

# --- Output ---
DEFAULT_OUTPUT_PRECISION: int = 4
"""Default number of decimal places used by string formatting."""

MAX_OUTPUT_PRECISION: int = 15
"""Largest number of decimal places accepted by string formatting."""

# --- Comparison tolerances ---
ALMOST_EQUALS_HORIZONTAL_M: float = 0.5
"""Default horizontal tolerance for position comparison in m."""

ALMOST_EQUALS_VERTICAL_M: float = 0.05
"""Default vertical tolerance for position comparison in m."""

COLLINEAR_EPSILON: float = 1e-10
"""Largest sine of the deviation angle for which three points count as collinear."""

PARALLEL_EPSILON: float = 1e-12
"""Tolerance on normalized cross products below which paths are treated as parallel."""
