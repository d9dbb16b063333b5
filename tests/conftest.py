"""Common fixtures for testing the SVG sprite store."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from svg_sprite_store.sprite.sprite import SvgSprite
from svg_sprite_store.store import SpriteStore

SQUARE_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
    '<rect width="10" height="10"/></svg>'
)

TALL_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 32">'
    '<title>Tall</title><path d="M0 0h24v32H0z"/></svg>'
)

WIDE_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="20" height="10">'
    '<circle cx="5" cy="5" r="5"/></svg>'
)

GRADIENT_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
    '<defs><linearGradient id="a"><stop offset="0"/></linearGradient></defs>'
    '<rect fill="url(#a)" width="10" height="10"/></svg>'
)

NO_DIMENSIONS_ICON = '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>'


@pytest.fixture()
def square_icon() -> str:
    """An icon with a square viewBox."""
    return SQUARE_ICON


@pytest.fixture()
def tall_icon() -> str:
    """An icon taller than wide, with a title."""
    return TALL_ICON


@pytest.fixture()
def wide_icon() -> str:
    """An icon sized by width/height attributes, twice as wide as tall."""
    return WIDE_ICON


@pytest.fixture()
def gradient_icon() -> str:
    """An icon with an internal definition referenced by url()."""
    return GRADIENT_ICON


@pytest.fixture()
def no_dimensions_icon() -> str:
    """An icon without width, height or viewBox."""
    return NO_DIMENSIONS_ICON


@pytest.fixture()
def sprite() -> SvgSprite:
    """An empty sprite without hash in its path."""
    return SvgSprite("img/sprite.svg")


@pytest.fixture()
def hashed_sprite() -> SvgSprite:
    """An empty sprite whose path is content-addressed."""
    return SvgSprite("img/icons.[hash:8].svg")


@pytest.fixture()
def store() -> SpriteStore:
    """An empty store with default layout."""
    return SpriteStore()


@pytest.fixture()
def icon_dir(tmp_path: Path) -> Path:
    """A directory holding a few icons on disk."""
    icons = tmp_path / "icons"
    icons.mkdir()
    (icons / "home.svg").write_text(SQUARE_ICON, encoding="utf-8")
    (icons / "user.svg").write_text(TALL_ICON, encoding="utf-8")
    (icons / "notes.txt").write_text("not an icon", encoding="utf-8")
    return icons


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo handlers and levels installed on the package logger by a test."""
    logger = logging.getLogger("svg_sprite_store")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
