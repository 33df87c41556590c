"""Configuration container with typed access."""

from typing import TYPE_CHECKING, Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from fmedit.config._defaults import DEFAULT_CONFIG
from fmedit.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from fmedit.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from fmedit.config._models._editor import EditorConfig
from fmedit.config._models._logging import LoggingConfig

if TYPE_CHECKING:
    from pathlib import Path

T = TypeVar("T")


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    """Parse the logging section, falling back to defaults for bad enums."""
    try:
        level = LogLevel(data.get("level", "info"))
    except ValueError:
        level = LogLevel.INFO
    try:
        log_format = LogFormat(data.get("format", "json"))
    except ValueError:
        log_format = LogFormat.JSON
    return LoggingConfig(level=level, format=log_format, file=data.get("file", ""))


def _parse_editor(data: dict[str, Any]) -> EditorConfig:
    try:
        return EditorConfig.model_validate(data)
    except ValidationError:
        return EditorConfig()


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract the values in *data* that differ from *defaults*."""
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result


class Config(BaseModel):
    """Configuration container with typed access.

    Immutable once built. Use the factory methods (from_dict, from_file,
    load) rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _editor: EditorConfig = PrivateAttr(default_factory=EditorConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _logging: LoggingConfig | None = None,
        _editor: EditorConfig | None = None,
    ) -> None:
        super().__init__()
        self._data = _data if _data is not None else {}
        self._sources = _sources
        self._logging = _logging if _logging is not None else LoggingConfig()
        self._editor = _editor if _editor is not None else EditorConfig()

    @classmethod
    def _build(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
    ) -> Self:
        return cls(
            _data=merged,
            _sources=sources,
            _logging=_parse_logging(merged.get("logging", {})),
            _editor=_parse_editor(merged.get("editor", {})),
        )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
    ) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        from fmedit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)

        if validate:
            raise_if_validation_errors(validate_config(merged))

        return cls._build(merged, ())

    @classmethod
    def from_file(
        cls,
        path: "Path",  # noqa: UP037
        *,
        validate: bool = True,
    ) -> Self:
        """Load configuration from a single TOML file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        from fmedit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )
        merged = deep_merge(DEFAULT_CONFIG, data)

        if validate:
            raise_if_validation_errors(validate_config(merged), source=str(path))

        return cls._build(merged, (source,))

    @classmethod
    def load(
        cls,
        *,
        project_root: "Path | None" = None,  # noqa: UP037
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources merge from lowest to highest precedence:
        defaults, user, project, worktree, env, cli.

        Args:
            project_root: Project root directory. If None, auto-detect by
                searching upward for ``.fmedit.toml``.
            include_env: Include FMEDIT_* environment variables.
            include_cli: Include CLI overrides.
            cli_overrides: CLI argument overrides, used if include_cli is True.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        from fmedit.config._discovery import discover_sources  # noqa: PLC0415
        from fmedit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.DEFAULT:
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.name == ConfigSourceName.CLI:
                values = cli_overrides or {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        raise_if_validation_errors(validate_config(merged))

        return cls._build(merged, tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Sources that contributed to this configuration, highest first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def editor(self) -> EditorConfig:
        """Return the editor configuration section."""
        return self._editor

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("editor.field_key")
            'new_field'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: If False, only values that differ from the
                defaults are included.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Render the configuration as TOML."""
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))
