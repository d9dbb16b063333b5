"""Icon descriptors stored in a sprite."""

from typing import TYPE_CHECKING

from svg_sprite_store.constants import VIEW_NAME_PREFIX
from svg_sprite_store.models.config import NameOptions
from svg_sprite_store.models.metadata import IconMetadata
from svg_sprite_store.sprite.document import SvgDocument

if TYPE_CHECKING:
    from svg_sprite_store.sprite.sprite import SvgSprite


def join_public_path(public_path: str | None, url: str) -> str:
    """Prefix a sprite-relative URL with a public path.

    Args:
        public_path: Public URL prefix; trailing slashes are ignored.
        url: URL relative to the output directory.

    Returns:
        The URL, unchanged when there is no public path.
    """
    if not public_path:
        return url
    return f"{public_path.rstrip('/')}/{url.lstrip('/')}"


class SvgIcon:
    """Metadata and source of one icon inside one sprite.

    Created by ``SvgSprite.add_icon`` and never modified afterwards. The
    parsed document is rebuilt on demand instead of being kept around.

    Attributes:
        sprite: The sprite the icon is placed in
        identity: Key of the icon in the sprite (source path, optionally with a query)
        name: Icon name, used as the id of its ``<use>`` element
        content: SVG source of the icon
        symbol_name: Id of the icon's ``<symbol>``
        view_name: Id of the icon's ``<view>``
    """

    def __init__(
        self,
        sprite: "SvgSprite",
        identity: str,
        name: str,
        content: str,
        name_options: NameOptions | None = None,
    ) -> None:
        """Derive the icon names and check the content parses.

        Args:
            sprite: The sprite where the icon will be placed.
            identity: Key of the icon in the sprite.
            name: The icon name.
            content: The icon source.
            name_options: Prefix and suffix applied to the symbol name.

        Raises:
            SvgParseError: If the content is not a well-formed SVG document.
        """
        options = name_options or NameOptions()

        SvgDocument(content)

        self.sprite = sprite
        self.identity = identity
        self.name = name
        self.content = content
        self.symbol_name = f"{options.symbol_prefix}{name}{options.symbol_suffix}"
        self.view_name = f"{VIEW_NAME_PREFIX}{self.symbol_name}"

    def get_document(self) -> SvgDocument:
        """Parse the icon source into a new document."""
        return SvgDocument(self.content)

    def get_sprite_url(self, cache_bust: bool = False) -> str:
        """Relative URL of the sprite.

        Args:
            cache_bust: Append the symbol name as a query so browsers fetch the
                sprite again even though its path did not change.
        """
        url = self.sprite.declared_path
        return f"{url}?{self.symbol_name}" if cache_bust else url

    def url_to_symbol(self, public_path: str | None = None, cache_bust: bool = False) -> str:
        """URL of the icon's ``<symbol>``, for ``<use href>``."""
        return join_public_path(public_path, f"{self.get_sprite_url(cache_bust)}#{self.symbol_name}")

    def url_to_view(self, public_path: str | None = None, cache_bust: bool = False) -> str:
        """URL of the icon's ``<view>``, for ``<img src>`` or CSS ``url()``."""
        return join_public_path(public_path, f"{self.get_sprite_url(cache_bust)}#{self.view_name}")

    def metadata(self, public_path: str | None = None, cache_bust: bool = False) -> IconMetadata:
        """Build the object that replaces the icon in application code."""
        document = self.get_document()
        return IconMetadata(
            symbol=self.url_to_symbol(public_path, cache_bust),
            view=self.url_to_view(public_path, cache_bust),
            view_box=document.get_view_box(),
            title=document.get_title(),
        )

    def __repr__(self) -> str:
        return f"SvgIcon(identity={self.identity!r}, name={self.name!r})"
