"""Rewriting of sprite paths inside emitted text.

Icons are exported with URLs pointing at the sprite's declared path, which
may still contain a hash placeholder (``img/sprite.[hash].svg``). Once the
sprite is generated its real, content-addressed path is known and every
piece of text that referenced the placeholder (module code, stylesheets,
manifests) has to be patched. Text patched during an earlier build pass
holds the previous hashed path instead, which is re-targeted as well.
"""

import re


class PathRewriter:
    """Replace the placeholder and previous sprite paths with the current one.

    Attributes:
        original_path: Declared sprite path, as referenced before generation
        resource_path: Current interpolated sprite path
        previous_path: Interpolated path of the previous generation, if any
        original_pattern: Escaped, multiline pattern for ``original_path``
        previous_pattern: Escaped, multiline pattern for ``previous_path`` or None
    """

    def __init__(
        self,
        original_path: str,
        resource_path: str,
        previous_path: str | None = None,
    ) -> None:
        """Initialize the rewriter and compile its patterns.

        Args:
            original_path: Declared sprite path.
            resource_path: Path every match is replaced with.
            previous_path: Path produced by the previous generation.
        """
        self.original_path = original_path
        self.resource_path = resource_path
        self.previous_path = previous_path
        self.original_pattern = re.compile(re.escape(original_path), re.MULTILINE)
        self.previous_pattern = (
            re.compile(re.escape(previous_path), re.MULTILINE) if previous_path else None
        )

        targets = [original_path]
        if previous_path and previous_path != resource_path:
            targets.append(previous_path)
        targets = [t for t in targets if t and t != resource_path]

        # Longest match first
        self._pattern = (
            re.compile(
                "|".join(re.escape(t) for t in sorted(set(targets), key=len, reverse=True)),
                re.MULTILINE,
            )
            if targets
            else None
        )

    @property
    def is_noop(self) -> bool:
        """True when rewriting cannot change any text."""
        return self._pattern is None

    def rewrite(self, text: str) -> str:
        """Return the text with every stale sprite path replaced.

        Args:
            text: Arbitrary text such as module source or a stylesheet.

        Returns:
            The text referencing ``resource_path``.
        """
        if self._pattern is None or not text:
            return text
        return self._pattern.sub(lambda _: self.resource_path, text)

    def __repr__(self) -> str:
        return (
            f"PathRewriter(original_path={self.original_path!r}, "
            f"resource_path={self.resource_path!r}, previous_path={self.previous_path!r})"
        )
