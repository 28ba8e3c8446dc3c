"""
Command line interface for rendering scenes.
"""

from __future__ import annotations
import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .camera import Camera
from .color import Color
from .constants import GLASS
from .errors import LumenTraceError
from .lights import PointLight
from .materials import Material
from .patterns import CheckerPattern, RingPattern, StripePattern
from .scene_parser import load_scene
from .settings import RenderSettings
from .shapes import Cone, Cube, Cylinder, Plane, Sphere, glass_sphere
from .transformations import rotation_x, rotation_y, scaling, translation, view_transform
from .vec4 import point, vector
from .world import World, default_world

logger = logging.getLogger(__name__)

BUILTIN_SCENES = ('demo', 'default')


def create_demo_scene() -> World:
    """Create a demo scene with every shape and pattern type."""
    world = World(light=PointLight(point(-10, 10, -10), Color(1, 1, 1)))

    # Checkered floor, slightly reflective
    floor = Plane(material=Material(
        pattern=CheckerPattern(Color(0.9, 0.9, 0.9), Color(0.15, 0.15, 0.15)),
        specular=0.0,
        reflective=0.2
    ))
    world.add(floor)

    # Striped back wall
    wall = Plane(
        transform=translation(0, 0, 10) * rotation_x(math.pi / 2),
        material=Material(
            pattern=StripePattern(
                Color(0.45, 0.55, 0.7), Color(0.35, 0.45, 0.6), rotation_y(math.pi / 4)
            ),
            specular=0.0
        )
    )
    world.add(wall)

    # Center sphere - glass
    glass = glass_sphere(translation(0, 1, 0))
    glass.material = Material(
        color=Color(0.05, 0.05, 0.05),
        diffuse=0.1,
        shininess=300,
        reflective=0.9,
        transparency=0.9,
        refractive_index=GLASS
    )
    world.add(glass)

    # Left sphere - ringed
    world.add(Sphere(
        transform=translation(-2.5, 0.75, 1) * scaling(0.75, 0.75, 0.75),
        material=Material(
            pattern=RingPattern(
                Color(0.8, 0.3, 0.1), Color(0.4, 0.1, 0.05), scaling(0.2, 0.2, 0.2)
            ),
            diffuse=0.8,
            specular=0.3
        )
    ))

    # Right cube - mirror-ish
    world.add(Cube(
        transform=translation(2.5, 0.6, 1) * rotation_y(math.pi / 5) * scaling(0.6, 0.6, 0.6),
        material=Material(color=Color(0.6, 0.6, 0.7), reflective=0.5, specular=1.0)
    ))

    # Capped cylinder and cone in the back
    world.add(Cylinder(
        transform=translation(-1.5, 0, 4) * scaling(0.5, 1, 0.5),
        material=Material(color=Color(0.2, 0.6, 0.3)),
        minimum=0,
        maximum=2.5,
        closed=True
    ))
    world.add(Cone(
        transform=translation(1.5, 0, 4) * scaling(0.6, 1.5, 0.6),
        material=Material(color=Color(0.7, 0.6, 0.2)),
        minimum=-1,
        maximum=0,
        closed=True
    ))

    return world


def build_builtin_scene(name: str, settings: RenderSettings) -> Tuple[World, Camera]:
    """Build one of the built-in scenes with a camera for ``settings``."""
    if name == 'default':
        world = default_world()
        transform = view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))
    else:
        world = create_demo_scene()
        transform = view_transform(point(0, 2.5, -6), point(0, 1, 0), vector(0, 1, 0))

    camera = Camera(settings.width, settings.height, settings.field_of_view, transform)
    return world, camera


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='LumenTrace - A Python Whitted-style Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --width 800 --height 400 --depth 6 --output hd_render.png
  python main.py --scene scenes/demo.yaml --output demo.ppm
        '''
    )

    parser.add_argument('--scene', type=str, default='demo',
                        help="Scene file (YAML/JSON) or built-in scene 'demo'/'default' (default: demo)")
    parser.add_argument('--width', type=int, default=None, help='Image width (default: from scene, or 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: from scene, or 200)')
    parser.add_argument('--depth', type=int, default=None, help='Max recursion depth (default: from scene, or 5)')
    parser.add_argument('--fov', type=float, default=None, help='Field of view in degrees (default: from scene, or 60)')
    parser.add_argument('--output', type=str, default='output/render.png',
                        help='Output filename; .ppm writes plain PPM, other extensions go through Pillow')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')
    return parser


def _apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Return settings with any command line overrides applied."""
    return RenderSettings(
        width=args.width if args.width is not None else settings.width,
        height=args.height if args.height is not None else settings.height,
        field_of_view=math.radians(args.fov) if args.fov is not None else settings.field_of_view,
        max_depth=args.depth if args.depth is not None else settings.max_depth,
        gamma=settings.gamma
    )


def _load(args: argparse.Namespace) -> Tuple[World, Camera, RenderSettings]:
    if args.scene in BUILTIN_SCENES:
        settings = _apply_overrides(RenderSettings(), args)
        world, camera = build_builtin_scene(args.scene, settings)
        return world, camera, settings

    world, camera, settings = load_scene(args.scene)
    settings = _apply_overrides(settings, args)
    camera = Camera(settings.width, settings.height, settings.field_of_view, camera.transform)
    return world, camera, settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    # Print header
    print("=" * 60)
    print("LumenTrace Ray Tracer")
    print("=" * 60)

    try:
        world, camera, settings = _load(args)
    except ValueError as e:
        logger.error("Invalid render settings: %s", e)
        return 1
    except LumenTraceError as e:
        logger.error("Cannot load scene %s: %s", args.scene, e)
        return 1

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Field of view: {math.degrees(settings.field_of_view):.1f} degrees")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"\nScene: {args.scene}")
    print(f"  Objects in scene: {len(world)}")

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    camera.set_progress_callback(progress_callback)

    print("\nRendering...")
    try:
        image = camera.render(world, settings.max_depth)
    except LumenTraceError as e:
        print()
        logger.error("Render failed: %s", e)
        return 1
    print()

    output_path = Path(args.output)
    print(f"\nSaving to: {output_path}")
    try:
        image.save(output_path, gamma=settings.gamma)
    except OSError as e:
        logger.error("Cannot write %s: %s", output_path, e)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
