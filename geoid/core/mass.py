# geoid/core/mass.py
"""The PointMass class, the unit of matter in a geoid field.

A PointMass is an immutable record of a mass sitting on the rotation (y)
axis. The field model only ever reads `y` and `m`, so the class is kept as
small as possible; the conversion helpers exist so that callers can hand
over plain records (dicts, tuples or table rows) when they rebuild the mass
distribution.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class PointMass:
    """An immutable point mass located at (0, y, 0).

    Attributes:
        y (float): Position of the mass along the vertical (rotation) axis.
        m (float): The mass. It is expected to be positive, but this is the
            caller's responsibility: a non-positive mass only triggers a
            warning and is otherwise used as given.
    """

    y: float
    m: float

    def __post_init__(self) -> None:
        """Coerces the fields to float and flags non-physical masses."""
        # Use object.__setattr__ because the dataclass is frozen
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "m", float(self.m))

        if self.m <= 0:
            warnings.warn(
                f"PointMass at y={self.y:.4f} has a non-positive mass "
                f"({self.m:.4f}). The potential will not be gravity-dominated "
                "near this mass and radius solves may be meaningless.",
                UserWarning,
            )

    @property
    def position(self) -> Tuple[float, float, float]:
        """The 3D location of the mass."""
        return (0.0, self.y, 0.0)

    @classmethod
    def from_record(cls, record: Any) -> PointMass:
        """Builds a PointMass from a mapping, a (y, m) pair or a PointMass.

        Args:
            record (Any): One of
                - a `PointMass` (returned unchanged),
                - a mapping with keys 'y' and 'm',
                - a sequence of two numbers interpreted as (y, m).

        Returns:
            PointMass: The converted mass.

        Raises:
            TypeError: If the record has none of the supported shapes.
        """
        if isinstance(record, PointMass):
            return record
        if isinstance(record, Mapping):
            try:
                return cls(y=record["y"], m=record["m"])
            except KeyError as e:
                raise TypeError(
                    f"Mass records must provide both 'y' and 'm' keys, got "
                    f"{sorted(record.keys())}."
                ) from e
        try:
            y, m = record
        except (TypeError, ValueError) as e:
            raise TypeError(
                f"Cannot interpret {record!r} as a point mass. Expected a "
                "PointMass, a {'y': .., 'm': ..} mapping or a (y, m) pair."
            ) from e
        return cls(y=y, m=m)

    def to_record(self) -> dict:
        """Returns the mass as a plain {'y': .., 'm': ..} dict."""
        return {"y": self.y, "m": self.m}

    def __repr__(self) -> str:
        return f"PointMass(y={self.y:.4f}, m={self.m:.4f})"
