"""
AirVeil — Aircraft separation geometry for Python.

Immutable positions in geodetic or Euclidean coordinates with the
projection, distance, track and intersection primitives that
separation and conflict logic is built on.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from airveil.core.latlonalt import LatLonAlt
from airveil.core.position import INVALID, ZERO_LL, ZERO_XYZ, Position
from airveil.core.vectors import Vect2, Vect3, Velocity
from airveil.data.parameters import ParameterData
from airveil.data.wcv_table import WCVTable
from airveil.utils import units

__all__ = [
    "__version__",
    "Position",
    "ZERO_LL",
    "ZERO_XYZ",
    "INVALID",
    "LatLonAlt",
    "Vect2",
    "Vect3",
    "Velocity",
    "ParameterData",
    "WCVTable",
    "units",
]
