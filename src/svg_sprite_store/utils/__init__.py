"""Module initialization."""

from svg_sprite_store.utils.naming import has_hash_token, interpolate_name
from svg_sprite_store.utils.path_rewrite import PathRewriter

__all__ = [
    # Naming
    "interpolate_name",
    "has_hash_token",
    # Path rewriting
    "PathRewriter",
]
