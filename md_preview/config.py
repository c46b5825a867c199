"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_INPUT_CHARS
from .models import DisplayMode


@dataclass
class RenderConfig:
    """Configuration for rendering markdown previews.

    Only `is_mobile` and `is_slideshow` influence the rendered markup, and
    only its presentation classes; parsing is the same in every mode.

    Attributes:
        is_mobile: Use compact spacing and text sizes.
        is_slideshow: Use slideshow spacing and centered top-level headings.
            Takes precedence over `is_mobile`.
        current_host: Host of the page showing the output. Absolute links to
            any other host open in a new browsing context.
        wiki_route_prefix: Route prefix used by the click router for wiki
            documents.
        wiki_extensions: File extensions routed as wiki documents.
        max_file_size: Maximum input file size in bytes.
        max_input_chars: Maximum input length in characters for file rendering.

    Examples:
        RenderConfig(is_mobile=True, current_host="example.com")
    """

    # Presentation
    is_mobile: bool = False
    is_slideshow: bool = False

    # Links and routing
    current_host: str | None = None
    wiki_route_prefix: str = "/wiki/"
    wiki_extensions: tuple[str, ...] = (".md",)

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS

    @property
    def display_mode(self) -> DisplayMode:
        return DisplayMode.from_flags(self.is_mobile, self.is_slideshow)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-preview]`` table from `pyproject.toml` and the
    ``[md-preview]`` or ``[tool.md-preview]`` table from `.md-preview.toml`.
    Returns default values when no configuration is found. TOML files that
    cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-preview")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".md-preview.toml",
            table_paths=[("md-preview",), ("tool", "md-preview")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RenderConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RenderConfig()

    try:
        return RenderConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: RenderConfig) -> RenderConfig:
    """Coerce TOML-friendly values into the shapes the renderer expects.

    Lists of extensions become lowercase tuples and a single string is treated
    as a one-item list. The wiki route prefix always ends with ``/``.
    """
    extensions = config.wiki_extensions
    if isinstance(extensions, str):
        extensions = (extensions,)
    if isinstance(extensions, (list, tuple)):
        extensions = tuple(
            extension.lower() if isinstance(extension, str) else extension
            for extension in extensions
        )

    prefix = config.wiki_route_prefix
    if isinstance(prefix, str) and not prefix.endswith("/"):
        prefix = f"{prefix}/"

    current_host = config.current_host
    if isinstance(current_host, str):
        current_host = current_host.strip() or None

    return replace(
        config, wiki_extensions=extensions, wiki_route_prefix=prefix, current_host=current_host
    )


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If flags are not booleans, routing values are malformed,
            or numeric limits are not positive integers.

    Examples:
        validate_config(RenderConfig(is_mobile=True))
    """
    config = normalize_config(config)

    for key in ("is_mobile", "is_slideshow"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    if config.current_host is not None and not isinstance(config.current_host, str):
        raise ConfigError("`current_host` must be a string")

    if not isinstance(config.wiki_route_prefix, str) or not config.wiki_route_prefix.startswith(
        "/"
    ):
        raise ConfigError("`wiki_route_prefix` must be an absolute path such as /wiki/")

    if not isinstance(config.wiki_extensions, tuple) or not all(
        isinstance(extension, str) and extension.startswith(".") and len(extension) > 1
        for extension in config.wiki_extensions
    ):
        raise ConfigError("`wiki_extensions` must be a list of extensions such as .md")

    _ensure_integers(
        {"max_file_size": config.max_file_size, "max_input_chars": config.max_input_chars}
    )
    _ensure_positive(
        {"max_file_size": config.max_file_size, "max_input_chars": config.max_input_chars}
    )


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, is_mobile=True, current_host="example.com")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), is_slideshow=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
