"""File system helpers for the SVG sprite store.

Provides a consistent interface for the few file system operations the
package performs: reading icon sources, writing generated sprites and
manifests, and discovering icons in a source directory.
"""

import json
from pathlib import Path
from typing import Any

# Type aliases
PathLike = str | Path
JsonData = dict[str, Any] | list[Any]


def normalize_path(path: PathLike) -> Path:
    """Convert a string path to a Path object.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def write_text(file_path: PathLike, content: str, make_dirs: bool = True) -> None:
    """Write text content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Text content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "w", encoding="utf-8") as f:
        f.write(content)


def to_json(data: JsonData, indent: int = 2) -> str:
    """Serialize data to a JSON string with stable key order."""
    return json.dumps(data, indent=indent, sort_keys=True)


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory

    Raises:
        PermissionError: If the directory cannot be created due to permissions
    """
    path = normalize_path(dir_path)
    path.mkdir(exist_ok=True, parents=True)
    return path


def list_files(dir_path: PathLike, pattern: str = "*", recursive: bool = False) -> list[Path]:
    """List files in a directory matching a pattern.

    Args:
        dir_path: Path to the directory (string or Path object)
        pattern: Glob pattern to match files
        recursive: Whether to search recursively

    Returns:
        Sorted list of Path objects for matching files (directories excluded)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    normalized_path = normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    if recursive:
        paths = normalized_path.glob(f"**/{pattern}")
    else:
        paths = normalized_path.glob(pattern)

    return sorted(p for p in paths if p.is_file())
