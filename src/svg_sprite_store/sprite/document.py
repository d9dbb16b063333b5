"""SVG document parsing and symbol conversion.

An ``SvgDocument`` wraps the source of a single icon. It answers geometry
questions (viewBox, intrinsic or scaled dimensions, title) and converts the
icon into a ``<symbol>`` that can live next to many other icons inside one
sprite document:

- every internal id, and every reference to it, is prefixed with the symbol id
  so icons never collide once merged;
- ``<defs>`` content and standalone ``<clipPath>`` elements are hoisted out of
  the symbol, to be gathered in the single ``<defs>`` block of the sprite.

The class also provides the string builders used to assemble the sprite.
"""

import copy
import html
import math
import re
from typing import NamedTuple
from xml.etree.ElementTree import Element, ParseError, tostring

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException

from svg_sprite_store.constants import (
    DEFAULT_ID_SEPARATOR,
    DIMENSION_DECIMALS,
    NAMESPACE_PREFIXES,
    SVG_NAMESPACE,
    SYMBOL_ATTRIBUTES,
    XLINK_NAMESPACE,
)
from svg_sprite_store.exceptions import SvgParseError, chain_exception

LENGTH_PATTERN = re.compile(r"([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(?:px)?")
VIEW_BOX_SEPARATOR = re.compile(r"[\s,]+")
URL_REFERENCE_PATTERN = re.compile(r"url\(\s*(['\"]?)#([^'\")\s]+)\1\s*\)")
HREF_ATTRIBUTES = ("href", "xlink:href")


class Dimensions(NamedTuple):
    """Width and height of an icon; both NaN when they cannot be determined."""

    width: float
    height: float

    @property
    def is_valid(self) -> bool:
        """True when both values are known."""
        return not (math.isnan(self.width) or math.isnan(self.height))


class SymbolParts(NamedTuple):
    """An icon converted for inclusion in a sprite."""

    symbol: str
    symbol_defs: str


def _split_tag(tag: str) -> tuple[str | None, str]:
    """Split ``{namespace}local`` into its namespace and local name."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return None, tag


def _local_name(tag: object) -> str:
    """Local name of an element tag or attribute key."""
    if not isinstance(tag, str):
        return ""
    return _split_tag(tag)[1].split(":")[-1]


def round_half_up(value: float, decimals: int = DIMENSION_DECIMALS) -> float:
    """Round to the given number of decimals, halves away from zero on the positive side."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Format a coordinate or size without a trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def _parse_length(value: str | None) -> float | None:
    """Parse a plain or ``px`` length; anything else is not numeric."""
    if value is None:
        return None
    match = LENGTH_PATTERN.fullmatch(value.strip())
    return float(match.group(1)) if match else None


def _quote(value: object) -> str:
    return html.escape(str(value), quote=True)


class SvgDocument:
    """Parsed SVG document of one icon.

    Attributes:
        content: The source the document was parsed from
        root: Root ``<svg>`` element, with SVG namespaces resolved to plain names
    """

    def __init__(self, content: str) -> None:
        """Parse the given content.

        Args:
            content: The content of an SVG file.

        Raises:
            SvgParseError: If the content is not well-formed XML or its root is not ``<svg>``.
        """
        self.content = content
        try:
            root = DefusedET.fromstring(content)
        except (ParseError, DefusedXmlException) as e:
            raise chain_exception(
                SvgParseError("Malformed SVG document", {"error": str(e)}), e
            ) from e

        if _local_name(root.tag) != "svg":
            raise SvgParseError(
                "Root element is not <svg>", {"root": _local_name(root.tag) or str(root.tag)}
            )

        self.root = self._strip_namespaces(root)

    @staticmethod
    def _strip_namespaces(root: Element) -> Element:
        """Drop the SVG namespace from tags and write XLink/XML attributes with their prefix.

        Elements and attributes of other namespaces (editor metadata) are left
        qualified and get their own declarations when serialized.
        """
        for element in root.iter():
            namespace, local = _split_tag(element.tag)
            if namespace in (None, SVG_NAMESPACE):
                element.tag = local

            attributes = {}
            for key, value in element.attrib.items():
                namespace, local = _split_tag(key)
                if namespace in NAMESPACE_PREFIXES:
                    key = f"{NAMESPACE_PREFIXES[namespace]}:{local}"
                elif namespace == SVG_NAMESPACE:
                    key = local
                attributes[key] = value
            element.attrib = attributes
        return root

    # Builders used to assemble a sprite

    @staticmethod
    def create(*contents: str) -> str:
        """Create an SVG document holding the given contents."""
        return (
            f'<svg xmlns="{SVG_NAMESPACE}" xmlns:xlink="{XLINK_NAMESPACE}">'
            f"{''.join(contents)}</svg>"
        )

    @staticmethod
    def create_defs(*contents: str) -> str:
        """Create a ``<defs>`` element holding the given contents."""
        return f"<defs>{''.join(contents)}</defs>"

    @staticmethod
    def create_symbol(attrs: list[tuple[str, str]], *contents: str) -> str:
        """Create a ``<symbol>`` element with the given attributes and contents."""
        rendered = "".join(f' {name}="{_quote(value)}"' for name, value in attrs)
        return f"<symbol{rendered}>{''.join(contents)}</symbol>"

    @staticmethod
    def create_use(
        element_id: str, href: str, width: float, height: float, x: float, y: float
    ) -> str:
        """Create a ``<use>`` element placing a symbol at the given position."""
        return (
            f'<use id="{_quote(element_id)}" xlink:href="#{_quote(href)}" '
            f'width="{format_number(width)}" height="{format_number(height)}" '
            f'x="{format_number(x)}" y="{format_number(y)}"></use>'
        )

    @staticmethod
    def create_view(element_id: str, view_box: str) -> str:
        """Create a ``<view>`` element exposing a region of the sprite."""
        return f'<view id="{_quote(element_id)}" viewBox="{_quote(view_box)}"></view>'

    # Queries

    def get_attribute(self, name: str) -> str | None:
        """Get the value of a root attribute, matching its name case-insensitively.

        Args:
            name: The attribute name.

        Returns:
            The attribute value or None when absent.
        """
        value = self.root.get(name)
        if value is not None:
            return value

        wanted = name.lower()
        for key, value in self.root.attrib.items():
            if _local_name(key).lower() == wanted:
                return value
        return None

    def get_view_box(self) -> str | None:
        """Get the value of the viewBox attribute."""
        return self.get_attribute("viewBox")

    def get_title(self) -> str:
        """Get the text of the document's ``<title>``, or an empty string."""
        for element in self.root.iter():
            if _local_name(element.tag) == "title":
                return "".join(element.itertext()).strip()
        return ""

    def get_intrinsic_dimensions(self) -> Dimensions:
        """Resolve width and height from the attributes, falling back to the viewBox."""
        width = _parse_length(self.get_attribute("width"))
        height = _parse_length(self.get_attribute("height"))
        if width is not None and height is not None:
            return Dimensions(width, height)

        view_box = self.get_view_box()
        if view_box:
            parts = VIEW_BOX_SEPARATOR.split(view_box.strip())
            if len(parts) >= 4:
                width = _parse_length(parts[2])
                height = _parse_length(parts[3])
                if width is not None and height is not None:
                    return Dimensions(width, height)

        return Dimensions(math.nan, math.nan)

    def get_dimensions(
        self, target_width: float | None = None, target_height: float | None = None
    ) -> Dimensions:
        """Get the document dimensions, optionally scaled to a target size.

        Scaling keeps the aspect ratio. When both targets are given the
        target height wins.

        Args:
            target_width: Resize so the width matches, scaling the height.
            target_height: Resize so the height matches, scaling the width.

        Returns:
            The dimensions, both NaN when they cannot be determined.
        """
        width, height = self.get_intrinsic_dimensions()
        if math.isnan(width) or math.isnan(height):
            return Dimensions(math.nan, math.nan)

        if target_height:
            if height == 0:
                return Dimensions(math.nan, math.nan)
            return Dimensions(round_half_up(width * target_height / height), target_height)

        if target_width:
            if width == 0:
                return Dimensions(math.nan, math.nan)
            return Dimensions(target_width, round_half_up(height * target_width / width))

        return Dimensions(width, height)

    # Conversion

    def to_symbol(self, symbol_id: str, separator: str = DEFAULT_ID_SEPARATOR) -> SymbolParts:
        """Convert the document into a ``<symbol>`` and its hoisted definitions.

        Args:
            symbol_id: Id of the symbol, also used to prefix every internal id.
            separator: Inserted between the symbol id and each internal id.

        Returns:
            The ``<symbol>`` markup and the markup of the hoisted definitions.
        """
        root = copy.deepcopy(self.root)
        prefix = f"{symbol_id}{separator}"

        for element in root.iter():
            if element is not root:
                self._prefix_references(element, prefix)

        hoisted: list[Element] = []
        self._hoist_definitions(root, hoisted)

        attrs = [("id", symbol_id)]
        for name in SYMBOL_ATTRIBUTES:
            value = self.get_attribute(name)
            if value:
                attrs.append((name, value))

        body = html.escape(root.text or "", quote=False) + "".join(
            tostring(child, encoding="unicode") for child in root
        )
        symbol_defs = "".join(tostring(element, encoding="unicode") for element in hoisted)

        return SymbolParts(self.create_symbol(attrs, body), symbol_defs)

    @staticmethod
    def _prefix_references(element: Element, prefix: str) -> None:
        """Prefix the id declared by an element and every local reference it makes."""

        def prefix_urls(value: str) -> str:
            return URL_REFERENCE_PATTERN.sub(
                lambda m: f"url({m.group(1)}#{prefix}{m.group(2)}{m.group(1)})", value
            )

        for key, value in list(element.attrib.items()):
            if key == "id":
                element.set(key, f"{prefix}{value}")
            elif key in HREF_ATTRIBUTES and value.startswith("#"):
                element.set(key, f"#{prefix}{value[1:]}")
            elif "url(" in value:
                element.set(key, prefix_urls(value))

        if _local_name(element.tag) == "style" and element.text:
            element.text = prefix_urls(element.text)

    @classmethod
    def _hoist_definitions(cls, parent: Element, hoisted: list[Element]) -> None:
        """Move ``<defs>`` content and standalone clip paths out of the tree."""
        for child in list(parent):
            name = _local_name(child.tag)
            if name == "defs":
                cls._detach(parent, child)
                for definition in child:
                    definition.tail = None
                    hoisted.append(definition)
            elif name == "clipPath" and child.get("id"):
                cls._detach(parent, child)
                child.tail = None
                hoisted.append(child)
            else:
                cls._hoist_definitions(child, hoisted)

    @staticmethod
    def _detach(parent: Element, child: Element) -> None:
        """Remove a child while keeping the text that followed it."""
        if child.tail:
            index = list(parent).index(child)
            if index > 0:
                previous = parent[index - 1]
                previous.tail = (previous.tail or "") + child.tail
            else:
                parent.text = (parent.text or "") + child.tail
        parent.remove(child)
