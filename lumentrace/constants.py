"""
Numerical constants shared across the ray tracer.

Keeping the tolerances in one place makes the numerical tuning auditable:
- EPSILON: surface offset for secondary rays, the cap band for normals,
  and approximate equality of tuples, colors and matrices
- NEAR_ZERO: threshold for "is zero" tests on object-space ray
  coefficients. Object-space directions shrink under large scale
  transforms, so this must stay far below EPSILON.
"""

import sys

EPSILON = 1e-5
NEAR_ZERO = sys.float_info.epsilon

# Reflection/refraction bounces allowed per primary ray
DEFAULT_RECURSION_DEPTH = 5

# Refractive indices
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417

REFRACTIVE_INDICES = {
    'vacuum': VACUUM,
    'air': AIR,
    'water': WATER,
    'glass': GLASS,
    'diamond': DIAMOND,
}
