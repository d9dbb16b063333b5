"""SVG sprite aggregation and generation.

A sprite collects icons registered from any number of producers and, once
they are all known, packs them into one SVG document:

    <svg>
      <defs>
        ...hoisted icon definitions
        ...<symbol/> per icon
      </defs>
      ...<view/> per icon
      ...<use/> per icon
    </svg>

Icons are always laid out in identity order, so the output does not depend
on the order producers registered them in. The output path is derived from
the declared path template and a hash of the generated content.
"""

import logging
import math
import re
import threading
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict

from svg_sprite_store.exceptions import IconNameCollisionError, MissingDimensionsError
from svg_sprite_store.models.config import LayoutConfig, NameOptions
from svg_sprite_store.sprite.document import SvgDocument, format_number
from svg_sprite_store.sprite.icon import SvgIcon
from svg_sprite_store.utils.naming import has_hash_token, interpolate_name
from svg_sprite_store.utils.path_rewrite import PathRewriter

# First word of a file name that is not part of a [token]
SPRITE_NAME_PATTERN = re.compile(r"(?!\[[^\[\]]*)\w+(?![^\[\]]*\])")
DEFAULT_SPRITE_NAME = "sprite"


def sprite_name_from_path(resource_path: str) -> str:
    """Derive a short sprite name from its path template (``img/icons.[hash].svg`` -> ``icons``)."""
    match = SPRITE_NAME_PATTERN.search(PurePosixPath(resource_path).name)
    return match.group(0) if match else DEFAULT_SPRITE_NAME


class SpriteGeneration(BaseModel):
    """Snapshot of a sprite after a generation pass.

    Attributes:
        sprite_name: Short name of the sprite
        original_resource_path: Declared path template
        resource_path: Current interpolated path
        previous_resource_path: Interpolated path of the generation before, if any
        content: Current sprite document
        changed: Whether this pass produced new content
        revision: Sprite revision the content was generated from
        has_hash: Whether the path template contains a hash token
    """

    model_config = ConfigDict(frozen=True)

    sprite_name: str
    original_resource_path: str
    resource_path: str
    previous_resource_path: str | None = None
    content: str
    changed: bool
    revision: int
    has_hash: bool

    def rewriter(self) -> PathRewriter:
        """Build the rewriter replacing stale sprite paths with ``resource_path``."""
        return PathRewriter(
            self.original_resource_path, self.resource_path, self.previous_resource_path
        )


class SvgSprite:
    """Icons gathered into one output sprite.

    ``add_icon`` may be called from several threads at once. ``generate`` is
    meant to run after every producer of a build pass is done.

    Attributes:
        declared_path: Path template as configured, possibly with hash tokens
        name: Short name of the sprite
        has_hash: Whether the path changes with the content
        interpolated_path: Path computed by the last generation (the declared path before)
        previous_interpolated_path: Path computed by the generation before the last
        content: Last generated document, empty before the first generation
        changed: Whether the last ``generate`` call produced new content
        revision: Incremented on every ``add_icon``
    """

    def __init__(self, resource_path: str) -> None:
        """Initialize an empty sprite.

        Args:
            resource_path: Sprite path relative to the output directory.
        """
        self.declared_path = resource_path
        self.name = sprite_name_from_path(resource_path)
        self.has_hash = has_hash_token(resource_path)
        self.interpolated_path = resource_path
        self.previous_interpolated_path: str | None = None
        self.content = ""
        self.changed = False
        self.revision = 0
        self._generated_revision = 0
        self._icons: dict[str, SvgIcon] = {}
        self._symbol_owners: dict[str, str] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    @property
    def dirty(self) -> bool:
        """True when icons were added since the last successful generation."""
        return self.revision != self._generated_revision

    @property
    def icons(self) -> dict[str, SvgIcon]:
        """Copy of the identity to icon mapping."""
        with self._lock:
            return dict(self._icons)

    def __len__(self) -> int:
        return len(self._icons)

    def __contains__(self, identity: object) -> bool:
        return identity in self._icons

    def add_icon(
        self,
        identity: str,
        name: str,
        content: str,
        name_options: NameOptions | None = None,
    ) -> SvgIcon:
        """Add an icon to the sprite, replacing any icon with the same identity.

        Args:
            identity: Key of the icon, usually its absolute source path.
            name: The icon name.
            content: The icon SVG source.
            name_options: Prefix and suffix applied to the symbol name.

        Returns:
            The stored icon.

        Raises:
            SvgParseError: If the content is not a well-formed SVG document.
            IconNameCollisionError: If another identity already uses the symbol name.
        """
        icon = SvgIcon(self, identity, name, content, name_options)

        with self._lock:
            owner = self._symbol_owners.get(icon.symbol_name)
            if owner is not None and owner != identity:
                raise IconNameCollisionError(
                    "Symbol name already in use",
                    {
                        "sprite": self.name,
                        "symbol": icon.symbol_name,
                        "identity": identity,
                        "existing": owner,
                    },
                )

            existing = self._icons.get(identity)
            if existing is not None:
                if existing.content != content:
                    self.logger.warning(
                        f"Replacing icon {identity} in sprite {self.name} with new content"
                    )
                self._symbol_owners.pop(existing.symbol_name, None)

            self._icons[identity] = icon
            self._symbol_owners[icon.symbol_name] = identity
            self.revision += 1

        self.logger.debug(f"Added icon {icon.name} to sprite {self.name} ({identity})")
        return icon

    def render(self, layout: LayoutConfig | dict[str, object] | None = None) -> str:
        """Pack the current icons into a sprite document without changing any state.

        Args:
            layout: Packing options; defaults are used for anything not given.

        Returns:
            The sprite document.

        Raises:
            MissingDimensionsError: If an icon's width and height cannot be determined.
            InvalidConfigError: If the layout options are invalid.
        """
        return self._render(self.icons, LayoutConfig.coerce(layout))

    def _render(self, icons: dict[str, SvgIcon], layout: LayoutConfig) -> str:
        defs: list[str] = []
        symbols: list[str] = []
        uses: list[str] = []
        views: list[str] = []

        x = layout.start_x
        y = layout.start_y

        for identity in sorted(icons):
            icon = icons[identity]
            document = icon.get_document()

            symbol, symbol_defs = document.to_symbol(icon.symbol_name)

            # Every icon is scaled to the row height
            width, height = document.get_dimensions(None, layout.icon_height)
            if math.isnan(width) or math.isnan(height):
                raise MissingDimensionsError(self.name, icon.name)

            defs.append(symbol_defs)
            symbols.append(symbol)
            uses.append(SvgDocument.create_use(icon.name, icon.symbol_name, width, height, x, y))
            views.append(
                SvgDocument.create_view(
                    icon.view_name, " ".join(format_number(v) for v in (x, y, width, height))
                )
            )

            # Advance by whole cells of icon_height
            x = x + layout.icon_height * math.ceil(width / layout.icon_height) + layout.delta_x

            if x + width > layout.start_x + layout.row_width:
                x = layout.start_x
                y += layout.icon_height + layout.delta_y

        return SvgDocument.create(SvgDocument.create_defs(*defs, *symbols), *views, *uses)

    def generate(self, layout: LayoutConfig | dict[str, object] | None = None) -> SpriteGeneration:
        """Generate the sprite content and its content-addressed path.

        Nothing is rendered when no icon was added since the last successful
        generation. A render identical to the current content keeps the
        current paths and reports no change.

        Args:
            layout: Packing options; defaults are used for anything not given.

        Returns:
            Snapshot of the sprite after the pass.

        Raises:
            MissingDimensionsError: If an icon's width and height cannot be determined.
                The sprite keeps its previous content and stays dirty.
            InvalidConfigError: If the layout options are invalid.
        """
        layout = LayoutConfig.coerce(layout)

        with self._lock:
            if not self.dirty:
                self.changed = False
                self.logger.debug(f"Sprite {self.name} is up to date, skipping generation")
                return self._snapshot()

            revision = self.revision
            content = self._render(self._icons, layout)
            icon_count = len(self._icons)
            self._generated_revision = revision

            if content == self.content:
                self.changed = False
                self.logger.debug(f"Sprite {self.name} regenerated without changes")
                return self._snapshot()

            self.previous_interpolated_path = self.interpolated_path if self.content else None
            self.interpolated_path = interpolate_name(self.declared_path, content)
            self.content = content
            self.changed = True

        self.logger.info(
            f"Generated sprite {self.name} with {icon_count} icons at {self.interpolated_path}"
        )
        return self._snapshot()

    def snapshot(self) -> SpriteGeneration:
        """Current state of the sprite as an immutable snapshot."""
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> SpriteGeneration:
        return SpriteGeneration(
            sprite_name=self.name,
            original_resource_path=self.declared_path,
            resource_path=self.interpolated_path,
            previous_resource_path=self.previous_interpolated_path,
            content=self.content,
            changed=self.changed,
            revision=self._generated_revision,
            has_hash=self.has_hash,
        )

    def __repr__(self) -> str:
        return f"SvgSprite(declared_path={self.declared_path!r}, icons={len(self._icons)})"
