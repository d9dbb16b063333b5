"""Name template interpolation for icons and sprite paths.

Templates use bracketed tokens that are replaced with parts of the resource
path or with a digest of the content:

- ``[name]``, ``[ext]``: file name without extension, and extension
- ``[path]``, ``[folder]``: directory of the resource (with trailing slash), and its last segment
- ``[hash]``, ``[contenthash]``: digest of the content
- ``[<hashType>:hash:<digestType>:<length>]``: digest with an explicit algorithm,
  encoding and length, every part optional (``[hash:5]``, ``[sha1:hash:hex:8]``)

Example:
    >>> interpolate_name("img/sprite.[hash:8].svg", "<svg/>")
    'img/sprite.677433a0.svg'
"""

import base64
import hashlib
import re
from pathlib import PurePosixPath

from svg_sprite_store.constants import (
    DEFAULT_DIGEST_TYPE,
    DEFAULT_HASH_TYPE,
    DEFAULT_RESOURCE_EXT,
    DEFAULT_RESOURCE_NAME,
    DUMMY_HASH_PAYLOAD,
    SUPPORTED_DIGEST_TYPES,
    SUPPORTED_HASH_TYPES,
)

HASH_TOKEN_PATTERN = re.compile(
    r"\[(?:([^:\]]+):)?(?:hash|contenthash)(?::([a-z]+\d*))?(?::(\d+))?\]",
    re.IGNORECASE,
)


def get_hash_digest(
    content: str | bytes,
    hash_type: str = DEFAULT_HASH_TYPE,
    digest_type: str = DEFAULT_DIGEST_TYPE,
    max_length: int | None = None,
) -> str:
    """Compute a digest of the given content.

    Args:
        content: Text (encoded as UTF-8) or bytes to hash.
        hash_type: One of the supported hashlib algorithms.
        digest_type: ``hex`` or ``base64`` (URL-safe, without padding).
        max_length: Truncate the digest to this many characters.

    Returns:
        The encoded digest.

    Raises:
        ValueError: If the hash or digest type is not supported.
    """
    if hash_type not in SUPPORTED_HASH_TYPES:
        raise ValueError(
            f"Unsupported hash type '{hash_type}', expected one of: "
            f"{', '.join(SUPPORTED_HASH_TYPES)}"
        )
    if digest_type not in SUPPORTED_DIGEST_TYPES:
        raise ValueError(
            f"Unsupported digest type '{digest_type}', expected one of: "
            f"{', '.join(SUPPORTED_DIGEST_TYPES)}"
        )

    data = content.encode("utf-8") if isinstance(content, str) else content
    digest = hashlib.new(hash_type, data)

    if digest_type == "hex":
        encoded = digest.hexdigest()
    else:
        encoded = base64.urlsafe_b64encode(digest.digest()).decode("ascii").rstrip("=")

    return encoded[:max_length] if max_length else encoded


def _resource_parts(resource_path: str | None) -> dict[str, str]:
    """Split a resource path into the values of the path tokens."""
    if not resource_path:
        return {
            "name": DEFAULT_RESOURCE_NAME,
            "ext": DEFAULT_RESOURCE_EXT,
            "path": "",
            "folder": "",
        }

    # Query strings are not part of the name
    path = PurePosixPath(resource_path.split("?", 1)[0].replace("\\", "/"))
    parent = path.parent.as_posix()
    return {
        "name": path.stem,
        "ext": path.suffix.lstrip("."),
        "path": "" if parent == "." else f"{parent.rstrip('/')}/",
        "folder": "" if parent == "." else path.parent.name,
    }


def interpolate_name(
    template: str, content: str | bytes, resource_path: str | None = None
) -> str:
    """Replace the tokens of a name template.

    Args:
        template: Template such as ``icon-[name]-[hash:5]`` or ``img/sprite.[hash].svg``.
        content: Content hashed by the hash tokens.
        resource_path: Path of the resource providing ``[name]``/``[ext]``/``[path]``/``[folder]``.

    Returns:
        The interpolated name.
    """

    def replace_hash(match: re.Match[str]) -> str:
        hash_type = (match.group(1) or DEFAULT_HASH_TYPE).lower()
        digest_type = (match.group(2) or DEFAULT_DIGEST_TYPE).lower()
        length = int(match.group(3)) if match.group(3) else None
        return get_hash_digest(content, hash_type, digest_type, length)

    name = HASH_TOKEN_PATTERN.sub(replace_hash, template)

    for token, value in _resource_parts(resource_path).items():
        name = name.replace(f"[{token}]", value)

    return name


def has_hash_token(template: str) -> bool:
    """Tell whether a path template changes with the content it is interpolated against."""
    return interpolate_name(template, DUMMY_HASH_PAYLOAD) != template
