"""CLI main entry point."""

import argparse
import logging
import sys

from galaxy_cloud.generator import GalaxyGenerator
from galaxy_cloud.io.cloud_io import save_cloud
from galaxy_cloud.io.rotation_gif import export_rotation_gif
from galaxy_cloud.params import InvalidParameter
from galaxy_cloud.regeneration import Regenerator
from galaxy_cloud.rotation import FrameClock
from galaxy_cloud.utils.config import Config, load_config
from galaxy_cloud.utils.logging_config import setup_logging
from galaxy_cloud.utils.reproducibility import make_rng

logger = logging.getLogger(__name__)

PARAMETER_FIELDS = (
    "count", "size", "radius", "branches", "spin",
    "randomness", "randomness_power", "color_inside", "color_outside",
)


def build_config(args) -> Config:
    """Merge an optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else Config()

    changes = {}
    for name in PARAMETER_FIELDS:
        value = getattr(args, name, None)
        if value is not None:
            changes[name] = value
    if changes:
        config.params = config.params.replace(**changes)

    if args.seed is not None:
        config.seed = args.seed
    if args.workers is not None:
        config.workers = args.workers
    if getattr(args, 'output', None):
        config.output_path = args.output
    if getattr(args, 'fps', None):
        config.fps = args.fps
    return config


def make_regenerator(config: Config) -> Regenerator:
    generator = GalaxyGenerator(rng=make_rng(config.seed), workers=config.workers)
    return Regenerator(generator)


def make_renderer(config: Config, interactive: bool):
    from galaxy_cloud.render.renderer_3d import CloudRenderer
    return CloudRenderer(
        figsize=config.figsize,
        dpi=config.dpi,
        background=config.background,
        elevation=config.elevation,
        interactive=interactive,
    )


def run_generate(config: Config):
    """Generate one cloud and write it to disk."""
    cloud = make_regenerator(config).on_parameter_change(config.params)
    output = config.output_path
    if not output.endswith(('.npz', '.json')):
        output += '.npz'
    save_cloud(cloud, output)
    print(f"Generated {len(cloud)} particles on {config.params.branches} branches")
    print(f"Saved to {output}")


def run_preview(config: Config):
    """Show the cloud rotating until the window is closed."""
    cloud = make_regenerator(config).on_parameter_change(config.params)
    renderer = make_renderer(config, interactive=True)
    clock = FrameClock()
    print(f"Previewing {len(cloud)} particles. Close the window to exit.")
    try:
        renderer.render(cloud, clock.orientation())
        while renderer.is_open():
            renderer.render(cloud, clock.orientation())
    finally:
        renderer.close()


def run_gif(config: Config, duration: float, time_scale: float):
    """Render a rotating animation to a GIF file."""
    import matplotlib
    matplotlib.use('Agg')

    cloud = make_regenerator(config).on_parameter_change(config.params)
    renderer = make_renderer(config, interactive=False)
    output = config.output_path
    if not output.endswith('.gif'):
        output += '.gif'
    try:
        n_frames = export_rotation_gif(cloud, renderer, output, fps=config.fps,
                                       duration=duration, time_scale=time_scale)
    finally:
        renderer.close()
    print(f"Exported {n_frames} frames to {output}")


def add_parameter_arguments(parser):
    group = parser.add_argument_group('galaxy parameters')
    group.add_argument('--count', type=int, default=None,
                       help='Number of particles (default: 100000)')
    group.add_argument('--size', type=float, default=None,
                       help='Rendered point size (default: 0.001)')
    group.add_argument('--radius', type=float, default=None,
                       help='Galaxy radius (default: 4)')
    group.add_argument('--branches', type=int, default=None,
                       help='Number of spiral arms (default: 12)')
    group.add_argument('--spin', type=float, default=None,
                       help='Extra rotation per unit radius, radians (default: 1.25)')
    group.add_argument('--randomness', type=float, default=None,
                       help='Jitter scale (default: 0.25)')
    group.add_argument('--randomness-power', type=float, default=None,
                       help='Jitter exponent, higher = tighter arms (default: 4)')
    group.add_argument('--color-inside', type=str, default=None,
                       help='Core color as #RRGGBB (default: #BC027F)')
    group.add_argument('--color-outside', type=str, default=None,
                       help='Rim color as #RRGGBB (default: #004CA3)')

    parser.add_argument('--config', type=str, default=None,
                        help='Config file (.json or .yaml)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')
    parser.add_argument('--workers', type=int, default=None,
                        help='Threads used to generate particles')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Galaxy Cloud - procedural spiral galaxy point clouds")
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate_parser = subparsers.add_parser('generate', help='Generate a cloud and save it (.npz or .json)')
    add_parameter_arguments(generate_parser)
    generate_parser.add_argument('--output', type=str, default=None,
                                 help='Output file (default: galaxy.npz)')

    preview_parser = subparsers.add_parser('preview', help='Show the rotating cloud in a window')
    add_parameter_arguments(preview_parser)

    gif_parser = subparsers.add_parser('gif', help='Export a rotating animation to GIF')
    add_parameter_arguments(gif_parser)
    gif_parser.add_argument('--output', type=str, default=None,
                            help='Output file (default: galaxy.gif)')
    gif_parser.add_argument('--fps', type=int, default=None,
                            help='Frames per second (default: 30)')
    gif_parser.add_argument('--duration', type=float, default=4.0,
                            help='Animation length in seconds')
    gif_parser.add_argument('--time-scale', type=float, default=10.0,
                            help='Simulated seconds per animation second')
    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    try:
        config = build_config(args)
        config.params.validate()
        if args.command == 'generate':
            run_generate(config)
        elif args.command == 'preview':
            run_preview(config)
        elif args.command == 'gif':
            run_gif(config, args.duration, args.time_scale)
    except InvalidParameter as e:
        logger.debug("Invalid parameter", exc_info=True)
        print(f"Invalid parameter {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == '__main__':
    main()
