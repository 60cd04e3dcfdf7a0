"""
CLI entry point for mapinfo.

Usage:
    mapinfo extract [extract_dir]         Report the levels of every map preset
    mapinfo scenes [extract_dir]          List the scene build-index table
    mapinfo resolve <preset> --cache-dir  Resolve a single preset file
    mapinfo config                        Show the effective configuration

Before running, export with the asset extractor into the extract folder:
1. "globalgamemanagers" (for ProjectSettings/EditorBuildSettings.asset)
2. the map preset bundles from StreamingAssets/Windows/maps
"""

import argparse
import logging
import sys
from pathlib import Path

from mapinfo import __version__
from mapinfo.config import MapInfoConfig, write_default_config
from mapinfo.document import DocumentError


def _load_config(args):
    """Fresh configuration for this invocation, with command line overrides."""
    config = MapInfoConfig(Path(args.config) if args.config else None)
    extract_dir = getattr(args, 'extract_dir', None)
    if extract_dir:
        config.set('extract_dir', extract_dir)
    return config


def cmd_extract(args):
    """Report the levels of every map preset."""
    from .extractor import ExtractionError, format_results, run_extraction

    config = _load_config(args)

    try:
        results = run_extraction(config, all_bundles=args.all_bundles)
        output = format_results(results)
        if output:
            print(output)
    except (DocumentError, ExtractionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if args.pause:
            try:
                input("Press Enter to Exit")
            except EOFError:
                pass

    return 0


def cmd_scenes(args):
    """List the scene build-index table."""
    from .resolver import load_index_table

    config = _load_config(args)

    try:
        table = load_index_table(config.build_settings_path)
    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path, index in sorted(table.items(), key=lambda item: item[1]):
        print(f"level{index}  {path}")
    print(f"\n{len(table)} scenes")
    return 0


def cmd_resolve(args):
    """Resolve a single preset file."""
    from .extractor import format_report, resolve_single
    from .resolver import load_index_table

    config = _load_config(args)

    try:
        scene_table = load_index_table(args.scenes) if args.scenes else None
        report = resolve_single(
            args.preset,
            args.cache_dir,
            scene_table,
            config.asset_extension,
            config.identity_suffix,
        )
    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if scene_table is None:
        for scene in report.scenes:
            print(scene)
    else:
        print(format_report(report))
    return 0


def cmd_config(args):
    """Show or write the configuration."""
    if args.write:
        path = write_default_config(Path(args.write))
        print(f"Wrote default config to {path}")
        return 0

    config = _load_config(args)
    for key, value in config.to_dict().items():
        print(f"{key}: {value}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Map preset level extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    mapinfo extract ./Extract
    mapinfo extract ./Extract --all-bundles
    mapinfo scenes ./Extract
    mapinfo resolve factory.asset --cache-dir Extract/maps.bundle/ExportedProject/Assets/MonoBehaviour
"""
    )
    parser.add_argument('--version', action='version', version=f'mapinfo {__version__}')
    parser.add_argument('--config', help='Path to a YAML config file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log errors')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # extract
    extract_p = subparsers.add_parser('extract', help='Report preset levels')
    extract_p.add_argument('extract_dir', nargs='?', help='Extractor output folder')
    extract_p.add_argument('--all-bundles', action='store_true',
                           help='Process every bundle folder, not just the first')
    extract_p.add_argument('--pause', action='store_true', help='Wait for Enter before exiting')
    extract_p.set_defaults(func=cmd_extract)

    # scenes
    scenes_p = subparsers.add_parser('scenes', help='List the build-index table')
    scenes_p.add_argument('extract_dir', nargs='?', help='Extractor output folder')
    scenes_p.set_defaults(func=cmd_scenes)

    # resolve
    resolve_p = subparsers.add_parser('resolve', help='Resolve a single preset')
    resolve_p.add_argument('preset', help='Preset .asset file')
    resolve_p.add_argument('--cache-dir', required=True, help='Folder of referenced presets')
    resolve_p.add_argument('--scenes', help='EditorBuildSettings.asset for level numbers')
    resolve_p.set_defaults(func=cmd_resolve)

    # config
    config_p = subparsers.add_parser('config', help='Show configuration')
    config_p.add_argument('--write', metavar='PATH', help='Write a default config file')
    config_p.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
