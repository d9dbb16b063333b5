"""Text artifacts whose sprite paths can be rewritten.

A build integration wraps every piece of emitted text that may reference a
sprite (module code, extracted stylesheets, manifests) in an object exposing
its text and how often it must be refreshed. The sprite store only relies on
that capability and never looks at what kind of artifact it is handling.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RewritableArtifact(Protocol):
    """Protocol for artifacts holding rewritable text."""

    text: str

    @property
    def refresh_always(self) -> bool:
        """Whether the text is rewritten even when the sprite did not change."""
        ...


class ModuleArtifact:
    """Module source; only refreshed after the sprite changed.

    Module text rewritten during an earlier pass is kept between passes, so
    it only needs patching again when the sprite path moves.
    """

    refresh_always = False

    def __init__(self, name: str, text: str) -> None:
        self.name = name
        self.text = text

    def __repr__(self) -> str:
        return f"ModuleArtifact(name={self.name!r})"


class StylesheetArtifact:
    """Extracted stylesheet; refreshed on every pass.

    Stylesheet extraction recreates its artifacts from the original source on
    every build, so they reference the declared path again each time.
    """

    refresh_always = True

    def __init__(self, name: str, text: str) -> None:
        self.name = name
        self.text = text

    def __repr__(self) -> str:
        return f"StylesheetArtifact(name={self.name!r})"
