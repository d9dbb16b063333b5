"""Regeneration of one sprite across build passes.

The regenerator remembers the sprite revision it last generated from, so a
pass in which no icon was registered costs nothing and leaves downstream
paths untouched. Icons without usable dimensions turn into warnings for the
pass instead of failing the whole build.
"""

import logging

from svg_sprite_store.artifacts import RewritableArtifact
from svg_sprite_store.exceptions import MissingDimensionsError
from svg_sprite_store.models.config import LayoutConfig
from svg_sprite_store.sprite.sprite import SpriteGeneration, SvgSprite
from svg_sprite_store.utils.path_rewrite import PathRewriter


class SpriteRegenerator:
    """Drives the generation of one sprite and the rewriting of its paths.

    Attributes:
        sprite: The sprite being generated
        layout: Validated packing options
        revision: Sprite revision of the last successful generation, None before
        changed: Whether the last pass produced new content
        last: Snapshot returned by the last pass
        warnings: Errors reported as warnings, one per failed pass
        last_warning: Error reported by the last pass, if any
    """

    def __init__(
        self, sprite: SvgSprite, layout: LayoutConfig | dict[str, object] | None = None
    ) -> None:
        """Initialize the regenerator, validating the layout options.

        Args:
            sprite: The sprite to generate.
            layout: Packing options.

        Raises:
            InvalidConfigError: If the layout options are invalid.
        """
        self.sprite = sprite
        self.layout = LayoutConfig.coerce(layout)
        self.revision: int | None = None
        self.changed = False
        self.last: SpriteGeneration | None = None
        self.warnings: list[MissingDimensionsError] = []
        self.last_warning: MissingDimensionsError | None = None
        self._rewriter: PathRewriter | None = None
        self.logger = logging.getLogger(__name__)

    def regenerate(self) -> SpriteGeneration:
        """Generate the sprite if icons were added since the last successful pass.

        Returns:
            Snapshot of the sprite; ``changed`` tells whether new content was produced.
        """
        self.last_warning = None

        if self.last is not None and self.revision == self.sprite.revision:
            self.logger.debug(f"Sprite {self.sprite.name} unchanged since revision {self.revision}")
            self.changed = False
            self.last = self.last.model_copy(update={"changed": False})
            return self.last

        try:
            generation = self.sprite.generate(self.layout)
        except MissingDimensionsError as e:
            self.logger.warning(str(e))
            self.warnings.append(e)
            self.last_warning = e
            self.changed = False
            self._set_last(self.sprite.snapshot().model_copy(update={"changed": False}))
            return self.last

        self.revision = generation.revision
        self.changed = generation.changed
        self._set_last(generation)
        return generation

    def _set_last(self, generation: SpriteGeneration) -> None:
        self.last = generation
        self._rewriter = generation.rewriter()

    @property
    def rewriter(self) -> PathRewriter | None:
        """Rewriter of the last pass, None before the first one."""
        return self._rewriter

    def rewrite(self, text: str) -> str:
        """Replace stale paths of this sprite in the given text.

        Sprites whose path has no hash never move, so their text is returned as is.
        """
        if not self.sprite.has_hash or self._rewriter is None:
            return text
        return self._rewriter.rewrite(text)

    def refresh_artifact(self, artifact: RewritableArtifact) -> bool:
        """Rewrite the text of an artifact when its refresh policy requires it.

        Args:
            artifact: Artifact holding text that may reference this sprite.

        Returns:
            True when the artifact text was modified.
        """
        if not self.sprite.has_hash:
            return False
        if not (self.changed or artifact.refresh_always):
            return False

        text = self.rewrite(artifact.text)
        if text == artifact.text:
            return False
        artifact.text = text
        return True
