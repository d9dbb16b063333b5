"""Content-addressed SVG sprites built from icons registered concurrently."""

__version__ = "0.1.0"

from svg_sprite_store.artifacts import ModuleArtifact, RewritableArtifact, StylesheetArtifact
from svg_sprite_store.exceptions import (
    IconNameCollisionError,
    MissingDimensionsError,
    SpriteError,
    SpriteStoreError,
    SvgParseError,
    UnknownSpriteError,
)
from svg_sprite_store.models.config import LayoutConfig, NameOptions
from svg_sprite_store.models.metadata import IconMetadata
from svg_sprite_store.sprite import (
    SpriteGeneration,
    SpriteRegenerator,
    SvgDocument,
    SvgIcon,
    SvgSprite,
)
from svg_sprite_store.store import SpriteStore
from svg_sprite_store.utils.path_rewrite import PathRewriter

__all__ = [
    "__version__",
    # Registry
    "SpriteStore",
    # Sprites
    "SvgDocument",
    "SvgIcon",
    "SvgSprite",
    "SpriteGeneration",
    "SpriteRegenerator",
    "PathRewriter",
    # Artifacts
    "RewritableArtifact",
    "ModuleArtifact",
    "StylesheetArtifact",
    # Models
    "LayoutConfig",
    "NameOptions",
    "IconMetadata",
    # Errors
    "SpriteStoreError",
    "SpriteError",
    "SvgParseError",
    "MissingDimensionsError",
    "IconNameCollisionError",
    "UnknownSpriteError",
]
