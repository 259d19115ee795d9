"""Token metadata records (ERC-721 style)."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .catalog import Selection


DEFAULT_NAME_TEMPLATE = "{prefix} #{edition}"


class TraitAttribute(BaseModel):
    trait_type: str
    value: str


class TokenMetadata(BaseModel):
    """Metadata record for one token.

    Extra keys (``extra_metadata`` from the config) are kept and serialized
    alongside the standard fields.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    description: str = ""
    image: str
    edition: int = Field(ge=1)
    attributes: list[TraitAttribute] = Field(default_factory=list)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def image_uri(base_uri: str, edition: int) -> str:
    """Join the base URI and image filename, tolerating a trailing slash."""
    if base_uri.endswith("/"):
        return f"{base_uri}{edition}.png"
    return f"{base_uri}/{edition}.png"


def render_name(template: str, prefix: str, edition: int) -> str:
    """Render a token display name.

    Uses str.format() with ``prefix`` and ``edition`` placeholders. A
    template referencing anything else falls back to the default.
    """
    try:
        return template.format(prefix=prefix, edition=edition)
    except (KeyError, IndexError, ValueError):
        return DEFAULT_NAME_TEMPLATE.format(prefix=prefix, edition=edition)


def build_metadata(
    edition: int,
    selection: Selection,
    *,
    name_prefix: str,
    description: str,
    base_uri: str,
    name_template: str = DEFAULT_NAME_TEMPLATE,
    extra: dict[str, Any] | None = None,
) -> TokenMetadata:
    """Assemble the metadata record for an accepted selection.

    Attributes follow render order, the same order the layers are stacked.
    """
    attributes = [
        TraitAttribute(trait_type=pick.layer, value=pick.name)
        for pick in selection.ordered()
    ]
    fields: dict[str, Any] = {
        "name": render_name(name_template, name_prefix, edition),
        "description": description,
        "image": image_uri(base_uri, edition),
        "edition": edition,
        "attributes": attributes,
    }
    # Extra metadata is merged last and may override standard keys.
    fields.update(extra or {})
    return TokenMetadata(**fields)


@dataclass
class Token:
    """An accepted generation result."""

    edition: int
    selection: Selection
    fingerprint: str
    metadata: TokenMetadata
    image_path: Path | None = None
