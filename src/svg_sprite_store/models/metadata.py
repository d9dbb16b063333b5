"""Icon metadata handed to application code.

Every registered icon is replaced, in the consuming application, by a small
object holding the URLs of its symbol and view inside the sprite plus the
information needed to render it with ``<svg viewBox=...><use href=...>``.
"""

import json

from pydantic import BaseModel, ConfigDict, Field


class IconMetadata(BaseModel):
    """URLs and geometry of one icon inside a sprite."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    symbol: str
    view: str
    view_box: str | None = Field(default=None, alias="viewBox")
    title: str = ""

    def to_dict(self) -> dict[str, str | None]:
        """Return the metadata keyed the way applications consume it."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        """Serialize the metadata to JSON using the public key names."""
        return self.model_dump_json(by_alias=True)

    def __str__(self) -> str:
        """Return the view URL as a JSON string, usable directly in CSS ``url()``."""
        return json.dumps(self.view)
