"""Sprite documents, icons and their generation."""

from svg_sprite_store.sprite.document import Dimensions, SvgDocument, SymbolParts
from svg_sprite_store.sprite.icon import SvgIcon
from svg_sprite_store.sprite.sprite import SpriteGeneration, SvgSprite
from svg_sprite_store.sprite.spriter import SpriteRegenerator

__all__ = [
    "Dimensions",
    "SymbolParts",
    "SvgDocument",
    "SvgIcon",
    "SvgSprite",
    "SpriteGeneration",
    "SpriteRegenerator",
]
