"""Edition configuration loaded from YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import ConfigError
from .metadata import TokenMetadata


class PreviewConfig(BaseModel):
    """Contact sheet settings."""

    generate: bool = True
    cols: int = Field(default=10, gt=0)
    rows: int = Field(default=10, gt=0)
    filename: str = "preview.png"
    margin: int = Field(default=10, ge=0)


class EditionConfig(BaseModel):
    """Read-only inputs for one generation run."""

    # Core
    edition_size: int = Field(default=10, gt=0)
    shuffle_metadata: bool = True
    width: int = Field(default=1024, gt=0)
    height: int = Field(default=1024, gt=0)
    traits_dir: Path = Path("./traits")
    output_dir: Path = Path("./output")
    images_subdir: str = "images"
    metadata_subdir: str = "metadata"
    rarity_delimiter: str = Field(default="#", min_length=1)
    max_attempts: int = Field(default=10000, gt=0)
    seed: int | None = None

    # Collection metadata
    name_prefix: str = "Token"
    name_template: str = "{prefix} #{edition}"
    description: str = ""
    base_uri: str = ""
    extra_metadata: dict[str, Any] = Field(default_factory=dict)

    # Rules
    incompatible: dict[str, list[str]] = Field(default_factory=dict)
    requires: dict[str, list[str]] = Field(default_factory=dict)
    mandatory_layers: list[str] = Field(default_factory=list)
    layer_presence: dict[str, float] = Field(default_factory=dict)
    strict_rules: bool = True

    preview: PreviewConfig = Field(default_factory=PreviewConfig)

    @field_validator("layer_presence")
    @classmethod
    def _check_presence(cls, value: dict[str, float]) -> dict[str, float]:
        for layer, probability in value.items():
            if not 0.0 <= probability <= 1.0:
                raise ValueError(
                    f"presence for layer '{layer}' must be within [0, 1], got {probability}"
                )
        return value

    @field_validator("extra_metadata")
    @classmethod
    def _check_extra_metadata(cls, value: dict[str, Any]) -> dict[str, Any]:
        # Extras are merged over the standard keys, so overrides must keep their types.
        reserved = {key: value[key] for key in TokenMetadata.model_fields if key in value}
        if reserved:
            sample = {"name": "token", "image": "token.png", "edition": 1, **reserved}
            try:
                TokenMetadata.model_validate(sample)
            except ValidationError as e:
                raise ValueError(
                    f"extra_metadata overrides reserved keys with invalid values: {sorted(reserved)}\n{e}"
                ) from e
        return value

    @property
    def images_dir(self) -> Path:
        return self.output_dir / self.images_subdir

    @property
    def metadata_dir(self) -> Path:
        return self.output_dir / self.metadata_subdir

    def resolve_paths(self, base: Path) -> "EditionConfig":
        """Return a copy with relative directories anchored at ``base``."""
        updates = {}
        if not self.traits_dir.is_absolute():
            updates["traits_dir"] = base / self.traits_dir
        if not self.output_dir.is_absolute():
            updates["output_dir"] = base / self.output_dir
        return self.model_copy(update=updates)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "EditionConfig":
        """Load and validate a YAML config file.

        Relative ``traits_dir``/``output_dir`` entries are resolved against the
        directory holding the file.

        Raises:
            ConfigError: If the file is missing, not a mapping, or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}:\n{e}") from e

        return config.resolve_paths(path.parent.resolve())
