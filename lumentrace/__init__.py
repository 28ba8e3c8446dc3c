"""
LumenTrace - A Python Whitted-style Ray Tracer

Renders scenes of transformed primitives with support for:
- Spheres, planes, cubes, cylinders and cones
- Phong lighting with hard shadows from a point light
- Recursive reflection and refraction (Schlick's approximation)
- Stripe, gradient, ring and checker patterns
- YAML/JSON scene files
- PPM and PNG output
"""

__version__ = "0.1.0"
__author__ = "LumenTrace Team"

from .vec4 import Vec4, point, vector
from .color import Color
from .matrix import Matrix
from .transformations import (
    translation, scaling, rotation_x, rotation_y, rotation_z, shearing, view_transform
)
from .ray import Ray
from .errors import (
    LumenTraceError, SceneConfigurationError, NonInvertibleMatrixError, DegenerateRayError
)
from .intersection import (
    Intersection, IntersectionComputations, intersections, hit, prepare_computations
)
from .shapes import Shape, Sphere, Plane, Cube, Cylinder, Cone, glass_sphere
from .patterns import (
    Pattern, StripePattern, GradientPattern, RingPattern, CheckerPattern, PointPattern
)
from .materials import Material
from .lights import PointLight
from .world import World, default_world
from .canvas import Canvas
from .camera import Camera
from .settings import RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
