"""Print the torsions along a short leucine fragment."""

from dihedral import Point3, dihedral, dihedral_series

# fmt: off
CHAIN = [
    Point3(24.969, 13.428, 30.692),  # N
    Point3(24.044, 12.661, 29.808),  # CA
    Point3(22.785, 13.482, 29.543),  # C
    Point3(21.951, 13.670, 30.431),  # O
    Point3(23.672, 11.328, 30.466),  # CB
    Point3(22.881, 10.326, 29.620),  # CG
    Point3(23.691,  9.935, 28.389),  # CD1
    Point3(22.557,  9.096, 30.459),  # CD2
]
# fmt: on


def main():
    print(dihedral(*CHAIN[:4]))
    for angle in dihedral_series(CHAIN):
        print(angle)


if __name__ == "__main__":
    main()
