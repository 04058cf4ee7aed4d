"""Dihedral (torsion) angles between planes defined by four points."""

from dihedral.geometry import (
    DegenerateDihedralError,
    Point3,
    dihedral,
    dihedral_series,
    dihedral_signed,
    dihedral_unsigned,
)

__version__ = "0.1.0"

__all__ = [
    "DegenerateDihedralError",
    "Point3",
    "dihedral",
    "dihedral_series",
    "dihedral_signed",
    "dihedral_unsigned",
]
