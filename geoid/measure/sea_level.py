# geoid/measure/sea_level.py
"""Choosing the target potential ("sea level") of the surface.

Sea level is expressed relative to the potential on the equator of the solid
body, V(radius, 0, 0). Multiplying that reference by a factor slightly above
1 gives a slightly deeper (more negative) potential, i.e. an ocean that hugs
the surface; smaller factors lift the sea level outwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.field import PotentialField

# Sea level factors used by the two standard bodies
EGG_SEA_LEVEL_FACTOR: float = 1.1
SPHERE_SEA_LEVEL_FACTOR: float = 1.002


def surface_potential(field: PotentialField, radius: float) -> float:
    """The potential at the equator of a body of the given radius."""
    return field.get_potential(radius, 0.0, 0.0)


@dataclass(frozen=True)
class SeaLevel:
    """A sea level together with the range a caller may adjust it in.

    Attributes:
        reference (float): The equatorial surface potential.
        default (float): The initial sea level.
        minimum (float): The deepest allowed sea level (2 x reference).
        maximum (float): The shallowest allowed sea level (0.2 x reference).
    """

    reference: float
    default: float
    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(
                f"SeaLevel range is empty: minimum={self.minimum:.4f} > "
                f"maximum={self.maximum:.4f}. The reference potential must be "
                "negative."
            )

    @classmethod
    def for_field(
        cls,
        field: PotentialField,
        radius: float = 4.0,
        factor: float = EGG_SEA_LEVEL_FACTOR,
    ) -> SeaLevel:
        """Derives the sea level and its range from the field's current state.

        Args:
            field (PotentialField): The field configuration.
            radius (float): Equatorial radius of the solid body.
            factor (float): Multiplier applied to the reference for the
                default sea level.

        Returns:
            SeaLevel: The derived sea level.
        """
        reference = surface_potential(field, radius)
        return cls(
            reference=reference,
            default=reference * factor,
            minimum=reference * 2.0,
            maximum=reference * 0.2,
        )

    def clamp(self, value: float) -> float:
        """Limits a requested sea level to [minimum, maximum]."""
        return min(max(value, self.minimum), self.maximum)
