# Numeric tolerances for dihedral calculations

# Degenerate geometry: a plane normal |a x b| = |a| |b| sin(theta) is treated as
# zero when sin(theta) falls below this, i.e. the three points are collinear
# (or two of them coincide).
DEGENERATE_TOL = 1e-10
