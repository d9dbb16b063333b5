"""Registry of the sprites built during one build.

A ``SpriteStore`` is created once per build and handed to every producer of
icons. Producers register icons under a sprite key (the sprite path template)
from any thread; once they are all done, the store generates every sprite,
writes the changed ones and rewrites the placeholder paths found in the
emitted text.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from svg_sprite_store.artifacts import RewritableArtifact
from svg_sprite_store.exceptions import MissingDimensionsError, UnknownSpriteError
from svg_sprite_store.models.config import LayoutConfig, NameOptions
from svg_sprite_store.sprite.icon import SvgIcon
from svg_sprite_store.sprite.sprite import SpriteGeneration, SvgSprite
from svg_sprite_store.sprite.spriter import SpriteRegenerator
from svg_sprite_store.utils.file_utils import PathLike, normalize_path, write_text
from svg_sprite_store.utils.naming import interpolate_name


class SpriteStore:
    """Sprites of a build, keyed by their declared path.

    Attributes:
        layout: Packing options shared by every sprite
        warnings: Errors reported as warnings by the last ``generate_all`` call
    """

    def __init__(self, layout: LayoutConfig | dict[str, object] | None = None) -> None:
        """Initialize an empty store.

        Args:
            layout: Packing options; defaults are used for anything not given.

        Raises:
            InvalidConfigError: If the layout options are invalid.
        """
        self.layout = LayoutConfig.coerce(layout)
        self.warnings: list[MissingDimensionsError] = []
        self._sprites: dict[str, SvgSprite] = {}
        self._regenerators: dict[str, SpriteRegenerator] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def get_sprite(self, sprite_key: str) -> SvgSprite:
        """Return the sprite registered under a key, creating it on first use."""
        with self._lock:
            sprite = self._sprites.get(sprite_key)
            if sprite is None:
                sprite = SvgSprite(sprite_key)
                self._sprites[sprite_key] = sprite
                self._regenerators[sprite_key] = SpriteRegenerator(sprite, self.layout)
                self.logger.debug(f"Created sprite {sprite.name} for {sprite_key}")
            return sprite

    @property
    def sprites(self) -> dict[str, SvgSprite]:
        """Copy of the key to sprite mapping."""
        with self._lock:
            return dict(self._sprites)

    def __len__(self) -> int:
        return len(self._sprites)

    def __contains__(self, sprite_key: object) -> bool:
        return sprite_key in self._sprites

    def register_icon(
        self,
        sprite_key: str,
        identity: str,
        content: str,
        name_options: NameOptions | None = None,
    ) -> SvgIcon:
        """Add an icon to a sprite, deriving its name from the identity and content.

        Args:
            sprite_key: Declared path of the sprite, e.g. ``img/icons.[hash:8].svg``.
            identity: Source path of the icon, optionally followed by a query.
            content: The icon SVG source.
            name_options: Name template and symbol prefix/suffix.

        Returns:
            The stored icon.

        Raises:
            SvgParseError: If the content is not a well-formed SVG document.
            IconNameCollisionError: If another icon of the sprite derives the same symbol name.
        """
        options = name_options or NameOptions()
        name = interpolate_name(options.template, content, identity)
        return self.get_sprite(sprite_key).add_icon(identity, name, content, options)

    def _regenerator(self, sprite_key: str) -> SpriteRegenerator:
        with self._lock:
            regenerator = self._regenerators.get(sprite_key)
        if regenerator is None:
            raise UnknownSpriteError("Unknown sprite", {"sprite": sprite_key})
        return regenerator

    def _all_regenerators(self) -> list[tuple[str, SpriteRegenerator]]:
        with self._lock:
            return sorted(self._regenerators.items())

    def generate_all(self) -> dict[str, SpriteGeneration]:
        """Generate every sprite that received icons since its last generation.

        Sprites holding an icon without dimensions are skipped for this pass;
        the errors are collected in ``warnings``.

        Returns:
            Snapshot of every sprite, keyed by declared path.
        """
        self.warnings = []
        generations: dict[str, SpriteGeneration] = {}

        for sprite_key, regenerator in self._all_regenerators():
            generations[sprite_key] = regenerator.regenerate()
            if regenerator.last_warning is not None:
                self.warnings.append(regenerator.last_warning)

        changed = sum(1 for generation in generations.values() if generation.changed)
        self.logger.info(
            f"Generated {len(generations)} sprites ({changed} changed, "
            f"{len(self.warnings)} warnings)"
        )
        return generations

    def generation(self, sprite_key: str) -> SpriteGeneration | None:
        """Snapshot of the last pass of a sprite, None before the first one.

        Raises:
            UnknownSpriteError: If nothing was registered under the key.
        """
        return self._regenerator(sprite_key).last

    def rewrite_paths(self, sprite_key: str, text: str) -> str:
        """Replace the stale paths of one sprite in the given text.

        Raises:
            UnknownSpriteError: If nothing was registered under the key.
        """
        return self._regenerator(sprite_key).rewrite(text)

    def rewrite_all(self, text: str) -> str:
        """Replace the stale paths of every sprite in the given text."""
        for _, regenerator in self._all_regenerators():
            text = regenerator.rewrite(text)
        return text

    def refresh_artifacts(self, artifacts: Iterable[RewritableArtifact]) -> int:
        """Rewrite the artifacts that reference a sprite whose path moved.

        Args:
            artifacts: Emitted text artifacts.

        Returns:
            Number of artifacts whose text was modified.
        """
        regenerators = [regenerator for _, regenerator in self._all_regenerators()]
        refreshed = 0

        for artifact in artifacts:
            modified = False
            for regenerator in regenerators:
                if regenerator.refresh_artifact(artifact):
                    modified = True
            if modified:
                refreshed += 1

        self.logger.debug(f"Refreshed {refreshed} artifacts")
        return refreshed

    def emit(self, output_dir: PathLike, only_changed: bool = True) -> list[Path]:
        """Write the generated sprites under the output directory.

        Args:
            output_dir: Directory the resource paths are relative to.
            only_changed: Skip sprites the last pass did not change.

        Returns:
            Paths of the written files.
        """
        output_path = normalize_path(output_dir)
        written: list[Path] = []

        for _, regenerator in self._all_regenerators():
            generation = regenerator.last
            if generation is None or not generation.content:
                continue
            if only_changed and not generation.changed:
                continue

            target = output_path / generation.resource_path
            write_text(target, generation.content)
            written.append(target)
            self.logger.info(f"Wrote sprite {generation.sprite_name} to {target}")

        return written

    def __repr__(self) -> str:
        return f"SpriteStore(sprites={len(self._sprites)})"
