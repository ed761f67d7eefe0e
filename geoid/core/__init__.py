"""
geoid.core

Defines the core data structures of a geoid model.
"""

from .distribution import pole_masses, slice_scale
from .field import PotentialField, characteristic_bracket, default_masses
from .mass import PointMass

__all__ = [
    "PointMass",
    "PotentialField",
    "characteristic_bracket",
    "default_masses",
    "pole_masses",
    "slice_scale",
]
