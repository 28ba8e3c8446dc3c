"""
Scene description language parser.

Supports a YAML-based scene description format with:
- Camera configuration
- Render settings
- A single point light
- Materials library (with patterns and single inheritance)
- Objects (shapes with transforms and materials)

Example scene file:
```yaml
camera:
  width: 400
  height: 200
  field_of_view: 60
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  max_depth: 5

light:
  position: [-10, 10, -10]
  intensity: [1, 1, 1]

materials:
  floor:
    pattern:
      type: checker
      colors: [[1, 1, 1], [0.2, 0.2, 0.2]]
    specular: 0
    reflective: 0.2

  glass:
    color: [0.1, 0.1, 0.1]
    transparency: 0.9
    reflective: 0.9
    refractive_index: glass

objects:
  - type: plane
    material: floor

  - type: sphere
    transform:
      - [scale, 0.5, 0.5, 0.5]
      - [translate, 0, 0.5, 0]
    material: glass
```

Transform steps are applied in the order listed, so the example scales
first and then translates.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import json
import logging
import math

import yaml

from .camera import Camera
from .color import Color
from .constants import REFRACTIVE_INDICES
from .errors import LumenTraceError, NonInvertibleMatrixError
from .lights import PointLight
from .materials import Material
from .matrix import Matrix
from .patterns import CheckerPattern, GradientPattern, Pattern, RingPattern, StripePattern, PointPattern
from .settings import RenderSettings
from .shapes import Cone, Cube, Cylinder, Plane, Shape, Sphere, glass_sphere
from .transformations import (
    rotation_x, rotation_y, rotation_z, scaling, shearing, translation, view_transform
)
from .vec4 import Vec4, point, vector
from .world import World

logger = logging.getLogger(__name__)


class SceneParseError(LumenTraceError):
    """Error during scene parsing."""
    pass


TRANSFORM_STEPS: Dict[str, Tuple[Callable[..., Matrix], int]] = {
    'translate': (translation, 3),
    'scale': (scaling, 3),
    'rotate_x': (rotation_x, 1),
    'rotate_y': (rotation_y, 1),
    'rotate_z': (rotation_z, 1),
    'shear': (shearing, 6),
}

TWO_COLOR_PATTERNS = {
    'stripe': StripePattern,
    'gradient': GradientPattern,
    'ring': RingPattern,
    'checker': CheckerPattern,
}

MATERIAL_SCALARS = (
    'ambient', 'diffuse', 'specular', 'shininess', 'reflective', 'transparency',
)


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Dict[str, Any]] = {}
        self.world = World()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.info("Loading scene from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)
        """
        # Materials first (objects reference them)
        self._parse_materials(self._section(data, 'materials', {}))
        self._parse_objects(self._section(data, 'objects', []))

        if 'light' not in data:
            raise SceneParseError("Scene has no light")
        self._parse_light(self._section(data, 'light', {}))

        camera_data = self._section(data, 'camera', {})
        self._parse_settings(self._section(data, 'render', {}), camera_data)
        self._parse_camera(camera_data)

        logger.info("Parsed scene with %d objects", len(self.world))
        return self.world, self.camera, self.settings

    @staticmethod
    def _section(data: Dict[str, Any], name: str, default: Any) -> Any:
        """Return a top-level section; a key with no value (``camera:``) counts as empty."""
        value = data.get(name)
        if value is None:
            return default
        if not isinstance(value, type(default)):
            kind = 'mapping' if isinstance(default, dict) else 'list'
            raise SceneParseError(f"'{name}' must be a {kind}")
        return value

    @staticmethod
    def _number(value: Any, what: str, cast: Callable[[Any], Any] = float) -> Any:
        """Convert a scene value to a number, naming the field on failure."""
        if isinstance(value, bool):
            raise SceneParseError(f"{what} must be a number, got {value!r}")
        try:
            return cast(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise SceneParseError(f"{what} must be a number, got {value!r}") from e

    def _parse_vec3(self, data: Any, what: str = 'Vec3') -> tuple[float, float, float]:
        """Parse three floats from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            x, y, z = data
        elif isinstance(data, dict):
            x, y, z = data.get('x', 0), data.get('y', 0), data.get('z', 0)
        else:
            raise SceneParseError(f"Cannot parse {what} from: {data}")
        return (
            self._number(x, f"{what} x"),
            self._number(y, f"{what} y"),
            self._number(z, f"{what} z")
        )

    def _parse_point(self, data: Any, what: str = 'Point') -> Vec4:
        return point(*self._parse_vec3(data, what))

    def _parse_vector(self, data: Any, what: str = 'Vector') -> Vec4:
        return vector(*self._parse_vec3(data, what))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            r, g, b = data
        elif isinstance(data, dict):
            r, g, b = data.get('r', 0), data.get('g', 0), data.get('b', 0)
        elif isinstance(data, str):
            # Handle hex colors
            hex_color = data[1:]
            if not data.startswith('#') or len(hex_color) != 6:
                raise SceneParseError(f"Cannot parse color from string: {data}")
            try:
                r, g, b = (int(hex_color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
            except ValueError as e:
                raise SceneParseError(f"Cannot parse color from string: {data}") from e
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")
        return Color(
            self._number(r, "Color red"),
            self._number(g, "Color green"),
            self._number(b, "Color blue")
        )

    def _parse_transform(self, steps: Any) -> Matrix:
        """Build a matrix from ``[op, args...]`` steps applied in listed order."""
        transform = Matrix.identity()
        if steps is None:
            return transform
        if not isinstance(steps, list):
            raise SceneParseError(f"Transform must be a list of steps, got: {steps}")

        for step in steps:
            if not isinstance(step, (list, tuple)) or not step:
                raise SceneParseError(f"Invalid transform step: {step}")

            op, args = str(step[0]).lower(), step[1:]
            if op not in TRANSFORM_STEPS:
                raise SceneParseError(f"Unknown transform: {op}")

            factory, arity = TRANSFORM_STEPS[op]
            if len(args) != arity:
                raise SceneParseError(f"Transform '{op}' takes {arity} arguments, got {len(args)}")

            # Later steps apply after earlier ones
            values = [self._number(a, f"Transform '{op}' argument") for a in args]
            transform = factory(*values) * transform

        return transform

    def _checked_transform(self, steps: Any, owner: str) -> Matrix:
        """Parse a transform and reject singular ones up front."""
        transform = self._parse_transform(steps)
        try:
            transform.inverse()
        except NonInvertibleMatrixError as e:
            raise SceneParseError(f"Transform of {owner} is not invertible") from e
        return transform

    def _parse_pattern(self, pattern_data: Dict[str, Any]) -> Pattern:
        """Parse a pattern definition inside a material."""
        if not isinstance(pattern_data, dict):
            raise SceneParseError(f"Pattern must be a mapping, got: {pattern_data}")
        pattern_type = str(pattern_data.get('type', 'stripe')).lower()
        transform = self._checked_transform(pattern_data.get('transform'), f"{pattern_type} pattern")

        if pattern_type in ('point', 'test'):
            return PointPattern(transform)

        if pattern_type not in TWO_COLOR_PATTERNS:
            raise SceneParseError(f"Unknown pattern type: {pattern_type}")

        colors = pattern_data.get('colors', [[1, 1, 1], [0, 0, 0]])
        if not isinstance(colors, list) or len(colors) != 2:
            raise SceneParseError(f"Pattern '{pattern_type}' needs exactly 2 colors")

        a, b = (self._parse_color(c) for c in colors)
        return TWO_COLOR_PATTERNS[pattern_type](a, b, transform)

    def _parse_refractive_index(self, value: Any) -> float:
        if isinstance(value, str):
            name = value.lower()
            if name not in REFRACTIVE_INDICES:
                raise SceneParseError(f"Unknown refractive index: {value}")
            return REFRACTIVE_INDICES[name]
        return self._number(value, "Refractive index")

    def _resolve_material_data(self, mat_data: Dict[str, Any], seen: tuple = ()) -> Dict[str, Any]:
        """Merge a material definition over the one it ``extends``."""
        parent = mat_data.get('extends')
        if parent is None:
            return dict(mat_data)
        if parent in seen:
            raise SceneParseError(f"Material inheritance cycle through: {parent}")
        if parent not in self.materials:
            raise SceneParseError(f"Unknown material: {parent}")

        merged = self._resolve_material_data(self.materials[parent], seen + (parent,))
        merged.update({k: v for k, v in mat_data.items() if k != 'extends'})
        return merged

    def _build_material(self, mat_data: Dict[str, Any], name: str = 'inline') -> Material:
        """Create a fresh Material from a (resolved) definition."""
        data = self._resolve_material_data(mat_data)
        kwargs: Dict[str, Any] = {}

        try:
            if 'color' in data:
                kwargs['color'] = self._parse_color(data['color'])
            for key in MATERIAL_SCALARS:
                if key in data:
                    kwargs[key] = self._number(data[key], key)
            if 'refractive_index' in data:
                kwargs['refractive_index'] = self._parse_refractive_index(data['refractive_index'])
            if 'pattern' in data:
                kwargs['pattern'] = self._parse_pattern(data['pattern'])
        except SceneParseError as e:
            raise SceneParseError(f"Material '{name}': {e}") from e

        try:
            return Material(**kwargs)
        except ValueError as e:
            raise SceneParseError(f"Invalid material '{name}': {e}") from e

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section.

        Definitions are kept as data; each object gets its own Material.
        """
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to definition")
        for name, mat_data in materials_data.items():
            if not isinstance(mat_data, dict):
                raise SceneParseError(f"Material '{name}' must be a mapping")
            self.materials[name] = mat_data

        # Validate every definition now so errors point at the material
        for name, mat_data in materials_data.items():
            self._build_material(mat_data, name)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self._build_material(self.materials[mat_ref], mat_ref)
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for index, obj_data in enumerate(objects_data):
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object {index} must be a mapping")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            owner = f"object {index} ({obj_type})"
            transform = self._checked_transform(obj_data.get('transform'), owner)
            material = self._get_material(obj_data.get('material'))

            shape: Shape
            if obj_type == 'sphere':
                shape = Sphere(transform, material)

            elif obj_type == 'glass_sphere':
                shape = glass_sphere(transform)
                if material is not None:
                    shape.material = material

            elif obj_type == 'plane':
                shape = Plane(transform, material)

            elif obj_type == 'cube':
                shape = Cube(transform, material)

            elif obj_type in ('cylinder', 'cone'):
                cls = Cylinder if obj_type == 'cylinder' else Cone
                closed = obj_data.get('closed', False)
                if not isinstance(closed, bool):
                    raise SceneParseError(f"{owner} 'closed' must be true or false, got {closed!r}")
                shape = cls(
                    transform,
                    material,
                    minimum=self._number(obj_data.get('minimum', -math.inf), f"{owner} minimum"),
                    maximum=self._number(obj_data.get('maximum', math.inf), f"{owner} maximum"),
                    closed=closed,
                )

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

            self.world.add(shape)

    def _parse_light(self, light_data: Dict[str, Any]) -> None:
        """Parse the light section."""
        if not isinstance(light_data, dict):
            raise SceneParseError("'light' must be a mapping")
        position = self._parse_point(light_data.get('position', [-10, 10, -10]), 'Light position')
        intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
        self.world.light = PointLight(position, intensity)

    def _parse_settings(self, settings_data: Dict[str, Any], camera_data: Dict[str, Any]) -> None:
        """Parse render settings; image size and field of view live under camera."""
        defaults = RenderSettings()
        width = self._number(camera_data.get('width', defaults.width), "Camera width", int)
        height = self._number(camera_data.get('height', defaults.height), "Camera height", int)
        fov_degrees = self._number(
            camera_data.get('field_of_view', math.degrees(defaults.field_of_view)),
            "Camera field_of_view"
        )
        max_depth = self._number(settings_data.get('max_depth', defaults.max_depth), "Render max_depth", int)
        gamma = self._number(settings_data.get('gamma', defaults.gamma), "Render gamma")
        try:
            self.settings = RenderSettings(
                width=width,
                height=height,
                field_of_view=math.radians(fov_degrees),
                max_depth=max_depth,
                gamma=gamma
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        from_point = self._parse_point(camera_data.get('from', [0, 0, -5]), 'Camera from')
        to_point = self._parse_point(camera_data.get('to', [0, 0, 0]), 'Camera to')
        up = self._parse_vector(camera_data.get('up', [0, 1, 0]), 'Camera up')

        transform = view_transform(from_point, to_point, up)
        if not transform.is_invertible():
            raise SceneParseError("Camera 'up' must not be parallel to the view direction")

        self.camera = Camera(
            self.settings.width,
            self.settings.height,
            self.settings.field_of_view,
            transform
        )


def load_scene(filepath: str) -> Tuple[World, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
