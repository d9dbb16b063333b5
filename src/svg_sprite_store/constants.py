"""Package-wide constants for the SVG sprite store.

This module centralizes the constants used throughout the package so the
sprite document format, layout defaults, and naming rules are defined in
exactly one place.

Constants are grouped into the following categories:
- XML Namespace Constants: Namespaces written into and read from SVG documents
- Naming Constants: Default path and icon name templates
- Layout Constants: Default packing options for sprite generation
- Hashing Constants: Defaults for content-addressed names
- CLI Constants: Defaults for the command line entry point
"""

# XML namespace constants
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
# Prefixes used when serializing namespaced attributes inside a sprite
NAMESPACE_PREFIXES = {
    XLINK_NAMESPACE: "xlink",
    XML_NAMESPACE: "xml",
}
# Root attributes copied onto the generated <symbol>
SYMBOL_ATTRIBUTES = ("class", "preserveAspectRatio", "viewBox")

# Naming constants
DEFAULT_SPRITE_PATH = "img/sprite.svg"  # Sprite path used when none is configured
DEFAULT_ICON_NAME_TEMPLATE = "icon-[name]-[hash:5]"  # Icon name derived from file name and content
VIEW_NAME_PREFIX = "view-"  # Prefix for <view> ids
DEFAULT_ID_SEPARATOR = ""  # Inserted between the symbol id and a rewritten internal id
DEFAULT_RESOURCE_NAME = "file"  # [name] when no resource path is known
DEFAULT_RESOURCE_EXT = "bin"  # [ext] when no resource path is known
DUMMY_HASH_PAYLOAD = "foo"  # Payload used to detect hash tokens in a path template

# Layout constants
DEFAULT_START_X = 0  # X position of the first icon
DEFAULT_START_Y = 0  # Y position of the first icon
DEFAULT_DELTA_X = 0  # Horizontal gap between icons
DEFAULT_DELTA_Y = 0  # Vertical gap between rows
DEFAULT_ICON_HEIGHT = 50  # Height every icon is scaled to in the sprite
DEFAULT_ROW_WIDTH = 1000  # Maximum row width before wrapping
DIMENSION_DECIMALS = 2  # Decimals kept when scaling icon dimensions

# Hashing constants
DEFAULT_HASH_TYPE = "md5"  # Hash algorithm for [hash] and [contenthash]
DEFAULT_DIGEST_TYPE = "hex"  # Digest encoding for [hash] and [contenthash]
SUPPORTED_HASH_TYPES = ("md5", "sha1", "sha256", "sha512")
SUPPORTED_DIGEST_TYPES = ("hex", "base64")

# CLI constants
DEFAULT_OUTPUT_DIR = "build"  # Output directory for emitted sprites
DEFAULT_JOBS = 4  # Worker threads used to register icons
MANIFEST_FILENAME = "icons.json"  # Icon metadata manifest written next to the sprites
DEFAULT_ICON_PATTERN = "*.svg"  # Glob used to discover icons in a source directory
