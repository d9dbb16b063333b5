"""Configuration models for the SVG sprite store.

Defines Pydantic models for sprite layout options, icon naming, per-sprite
sources, logging, and the top-level configuration loaded by the command line.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from svg_sprite_store.constants import (
    DEFAULT_DELTA_X,
    DEFAULT_DELTA_Y,
    DEFAULT_ICON_HEIGHT,
    DEFAULT_ICON_NAME_TEMPLATE,
    DEFAULT_ICON_PATTERN,
    DEFAULT_JOBS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROW_WIDTH,
    DEFAULT_SPRITE_PATH,
    DEFAULT_START_X,
    DEFAULT_START_Y,
)
from svg_sprite_store.exceptions import (
    ConfigFileNotFoundError,
    InvalidConfigError,
    chain_exception,
)


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class LayoutConfig(BaseModel):
    """Positioning and sizing options for the icons packed into a sprite.

    Accepts both snake_case names and the camelCase names used by build tool
    configurations (``startX``, ``iconHeight``...). Unknown keys are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    start_x: float = DEFAULT_START_X
    start_y: float = DEFAULT_START_Y
    delta_x: float = DEFAULT_DELTA_X
    delta_y: float = DEFAULT_DELTA_Y
    icon_height: float = DEFAULT_ICON_HEIGHT
    row_width: float = DEFAULT_ROW_WIDTH

    @field_validator("icon_height", "row_width")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate sizes that drive the packing are positive.

        Args:
            v: The configured size.

        Returns:
            The validated size.

        Raises:
            ValueError: If the size is zero or negative.
        """
        if v <= 0:
            raise ValueError("Icon height and row width must be greater than zero")
        return v

    @classmethod
    def coerce(cls, options: "LayoutConfig | dict[str, object] | None") -> "LayoutConfig":
        """Build a validated layout from a model, a mapping, or nothing.

        Args:
            options: Existing layout, raw options mapping, or None for defaults.

        Returns:
            A validated LayoutConfig.

        Raises:
            InvalidConfigError: If the options contain unknown keys or invalid values.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise chain_exception(
                InvalidConfigError(
                    "Invalid layout options",
                    {"options": dict(options), "errors": e.errors(include_url=False)},
                ),
                e,
            ) from e


class NameOptions(BaseModel):
    """How an icon's name and symbol id are derived.

    The icon name is ``template`` interpolated against the icon's file name
    and content; the symbol id wraps it with the optional prefix and suffix.
    """

    model_config = ConfigDict(frozen=True)

    template: str = DEFAULT_ICON_NAME_TEMPLATE
    symbol_prefix: str = ""
    symbol_suffix: str = ""

    @field_validator("template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Validate the template is not blank.

        Args:
            v: The icon name template.

        Returns:
            The validated template.

        Raises:
            ValueError: If the template is empty.
        """
        if not v.strip():
            raise ValueError("Icon name template must not be empty")
        return v


class SpriteConfig(BaseModel):
    """One output sprite and the directory its icons come from."""

    name: str = DEFAULT_SPRITE_PATH
    src: str
    pattern: str = DEFAULT_ICON_PATTERN
    recursive: bool = False
    icon_names: NameOptions = Field(default_factory=NameOptions)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "text"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log format is one of the supported renderers.

        Args:
            v: The log format string.

        Returns:
            The validated log format.

        Raises:
            ValueError: If the format is not supported.
        """
        valid_formats = ["json", "text"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v


class AppConfig(BaseModel):
    """Main configuration for a sprite build."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    public_path: str | None = None
    emit: bool = True
    jobs: int = DEFAULT_JOBS
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    sprites: list[SpriteConfig]
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("jobs")
    @classmethod
    def validate_jobs(cls, v: int) -> int:
        """Validate at least one worker is used.

        Args:
            v: Number of worker threads.

        Returns:
            The validated number of workers.

        Raises:
            ValueError: If fewer than one worker is requested.
        """
        if v < 1:
            raise ValueError("Jobs must be at least 1")
        return v

    @field_validator("sprites")
    @classmethod
    def validate_sprites(cls, v: list[SpriteConfig]) -> list[SpriteConfig]:
        """Validate at least one sprite is configured.

        Several entries may share a ``name``; their icons end up in one sprite.

        Args:
            v: Configured sprites.

        Returns:
            The validated list of sprites.

        Raises:
            ValueError: If the list is empty.
        """
        if not v:
            raise ValueError("At least one sprite must be configured")
        return v

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            ConfigFileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        from svg_sprite_store.utils.file_utils import read_text

        path = _normalize_path(config_path)
        if not path.is_file():
            raise ConfigFileNotFoundError("Configuration file not found", {"path": str(path)})

        config_data = yaml.safe_load(read_text(path))

        return cls.model_validate(config_data)
