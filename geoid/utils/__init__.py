"""
geoid.utils

Conversion helpers between plain data formats and geoid core objects.
"""

from .data_helpers import masses_from_data, masses_to_frame, masses_to_records

__all__ = [
    "masses_from_data",
    "masses_to_frame",
    "masses_to_records",
]
