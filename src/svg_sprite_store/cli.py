"""Command line entry point for building sprites from icon directories.

Usage:
    svg-sprite-store build --config sprites.yaml
    svg-sprite-store build --src icons --name "img/icons.[hash:8].svg" --output-dir dist

Every icon found in the configured source directories is registered
concurrently, then all sprites are generated and written under the output
directory together with an ``icons.json`` manifest mapping each icon to its
metadata.
"""

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import yaml
from pydantic import ValidationError

from svg_sprite_store import __version__
from svg_sprite_store.constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SPRITE_PATH,
    MANIFEST_FILENAME,
)
from svg_sprite_store.exceptions import ConfigurationError, SpriteError
from svg_sprite_store.models.config import AppConfig, SpriteConfig
from svg_sprite_store.sprite.icon import SvgIcon
from svg_sprite_store.store import SpriteStore
from svg_sprite_store.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
)
from svg_sprite_store.utils.file_utils import list_files, read_text, to_json, write_text
from svg_sprite_store.utils.logging import setup_logging

LOGGER_NAME = "svg_sprite_store"
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the ``svg-sprite-store`` command."""
    parser = argparse.ArgumentParser(
        prog="svg-sprite-store", description="Combine SVG icons into content-addressed sprites"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the sprites and the icon manifest")
    source = build.add_mutually_exclusive_group(required=True)
    source.add_argument("--config", type=str, help="Path to a YAML configuration file")
    source.add_argument("--src", type=str, help="Directory of icons for a single sprite")
    build.add_argument(
        "--name",
        type=str,
        default=None,
        help=f"Sprite path template used with --src (default: {DEFAULT_SPRITE_PATH})",
    )
    build.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help=f"Directory the sprites are written to (default: {DEFAULT_OUTPUT_DIR})",
    )
    build.add_argument("--public-path", type=str, default=None, help="Public URL prefix")
    build.add_argument("--jobs", type=int, default=None, help="Worker threads for registration")
    build.add_argument("--log-level", type=str, default=None, help="Logging level")

    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Build the configuration from a YAML file or from command line options.

    Options given on the command line override the values of the file.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        yaml.YAMLError: If the configuration file has invalid syntax.
        ValidationError: If the configuration values are invalid.
    """
    if args.config:
        config = AppConfig.from_yaml(args.config)
    else:
        config = AppConfig(
            sprites=[SpriteConfig(name=args.name or DEFAULT_SPRITE_PATH, src=args.src)]
        )

    # Overrides are validated like the file
    data = config.model_dump()
    if args.output_dir is not None:
        data["output_dir"] = args.output_dir
    if args.public_path is not None:
        data["public_path"] = args.public_path
    if args.jobs is not None:
        data["jobs"] = args.jobs
    if args.log_level is not None:
        data["logging"]["level"] = args.log_level
    return AppConfig.model_validate(data)


def register_file(
    store: SpriteStore, sprite_config: SpriteConfig, path: Path
) -> tuple[SpriteConfig, Path, SvgIcon]:
    """Read one icon file and register it in its sprite."""
    content = read_text(path)
    icon = store.register_icon(
        sprite_config.name, str(path.resolve()), content, sprite_config.icon_names
    )
    return sprite_config, path, icon


def build_manifest(
    icons: list[tuple[SpriteConfig, Path, SvgIcon]], public_path: str | None
) -> dict[str, dict[str, dict[str, str | None]]]:
    """Group icon metadata by sprite name, keyed by path relative to the sprite source."""
    manifest: dict[str, dict[str, dict[str, str | None]]] = {}
    for sprite_config, path, icon in icons:
        relative = path.relative_to(Path(sprite_config.src)).as_posix()
        manifest.setdefault(icon.sprite.name, {})[relative] = icon.metadata(public_path).to_dict()
    return manifest


def run_build(config: AppConfig) -> int:
    """Build every configured sprite.

    Returns:
        0 on success, 1 when an icon could not be registered or a sprite
        could not be generated.
    """
    logger = setup_logging(config.logging, LOGGER_NAME)
    store = SpriteStore(config.layout)

    jobs: list[tuple[SpriteConfig, Path]] = []
    for sprite_config in config.sprites:
        try:
            files = list_files(sprite_config.src, sprite_config.pattern, sprite_config.recursive)
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.error(f"Cannot read icons of sprite {sprite_config.name}: {e}")
            return 1
        if not files:
            logger.warning(f"No icons matching {sprite_config.pattern} in {sprite_config.src}")
        jobs.extend((sprite_config, path) for path in files)

    logger.info(f"Registering {len(jobs)} icons with {config.jobs} workers")

    icons: list[tuple[SpriteConfig, Path, SvgIcon]] = []
    failures = 0
    with ThreadPoolExecutor(max_workers=config.jobs) as executor:
        futures = {
            executor.submit(register_file, store, sprite_config, path): path
            for sprite_config, path in jobs
        }
        for future in as_completed(futures):
            try:
                icons.append(future.result())
            except (SpriteError, OSError, UnicodeDecodeError) as e:
                failures += 1
                logger.error(f"Failed to register icon {futures[future]}: {e}")

    store.generate_all()

    if config.emit:
        output_dir = Path(config.output_dir)
        store.emit(output_dir)

        icons.sort(key=lambda item: (item[0].name, str(item[1])))
        manifest = store.rewrite_all(to_json(build_manifest(icons, config.public_path)))
        write_text(output_dir / MANIFEST_FILENAME, manifest)
        logger.info(f"Wrote manifest for {len(icons)} icons to {output_dir / MANIFEST_FILENAME}")

    if failures or store.warnings:
        logger.error(
            f"Build finished with {failures} failed icons and {len(store.warnings)} skipped sprites"
        )
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point of the ``svg-sprite-store`` command.

    Args:
        argv: Command line arguments, ``sys.argv`` when None.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        handle_startup_error("CONFIG_ERROR", e.message, e.details)
        return 1
    except ValidationError as e:
        handle_startup_error(
            "CONFIG_ERROR", "Invalid configuration", {"errors": e.error_count(), "reason": str(e)}
        )
        return 1
    except yaml.YAMLError as e:
        handle_startup_error("CONFIG_ERROR", "Invalid YAML in configuration file", {"reason": str(e)})
        return 1

    try:
        return run_build(config)
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        logging.getLogger(LOGGER_NAME).info("Build interrupted by user")
        return EXIT_INTERRUPTED
