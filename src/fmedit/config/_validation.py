"""Configuration validation using Pydantic schemas.

The frozen section models already ignore unknown keys, so the lenient root
schema uses them directly. The strict variants override ``extra="forbid"``
so misspelled keys are reported.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from fmedit.config._models._editor import EditorConfig
from fmedit.config._models._logging import LoggingConfig
from fmedit.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from fmedit.config._models._common import ConfigSource


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "editor.field_key").
        message: Human-readable description of the issue.
        expected: Description of the expected value or type, if available.
        actual: The value that caused the issue.
        source: Name of the ConfigSource where the issue was found, or None.
        severity: Whether this is an error or a warning.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None
    severity: Literal["error", "warning"]


class ConfigSchema(BaseModel):
    """Root configuration schema (lenient mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    editor: EditorConfig = EditorConfig()


class LoggingConfigStrict(LoggingConfig):
    """Logging section schema (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class EditorConfigStrict(EditorConfig):
    """Editor section schema (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ConfigSchemaStrict(BaseModel):
    """Root configuration schema (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    logging: LoggingConfigStrict = LoggingConfigStrict()
    editor: EditorConfigStrict = EditorConfigStrict()


def _pydantic_error_to_issue(
    error: "ErrorDetails",  # noqa: UP037
    source: str | None,
) -> ValidationIssue:
    key = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "ge" in ctx:
            expected = f">= {ctx['ge']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
        source=source,
        severity="error",
    )


def validate_config(
    config: dict[str, Any],
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: The merged configuration dictionary to validate.
        strict: If True, unknown keys are errors. If False, they are ignored.

    Returns:
        List of ValidationIssue objects. Empty list indicates valid config.
    """
    schema_class = ConfigSchemaStrict if strict else ConfigSchema

    try:
        _ = schema_class.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err, source=None) for err in e.errors()]
    else:
        return []


def validate_source(
    source: "ConfigSource",  # noqa: UP037
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """Validate a single ConfigSource's values.

    Returns:
        Issues tagged with the source name; empty if the source is missing,
        empty or valid.
    """
    if not source.exists or not source.values:
        return []

    schema_class = ConfigSchemaStrict if strict else ConfigSchema

    try:
        _ = schema_class.model_validate(source.values)
    except ValidationError as e:
        return [
            _pydantic_error_to_issue(err, source=source.name.value)
            for err in e.errors()
        ]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first error-severity issue.

    Args:
        issues: Validation issues to check.
        source: Source string for the exception; defaults to the issue's.

    Raises:
        ConfigValidationError: If any issue has severity="error".
    """
    errors = [i for i in issues if i.severity == "error"]
    if errors:
        issue = errors[0]
        msg = f"Invalid configuration value for '{issue.key}'"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source or issue.source,
        )


def get_config_schema(*, strict: bool = False) -> dict[str, Any]:
    """Get the JSON Schema describing fmedit configuration files.

    Examples:
        >>> schema = get_config_schema()
        >>> sorted(schema["properties"])
        ['editor', 'logging']
    """
    schema_class = ConfigSchemaStrict if strict else ConfigSchema
    return schema_class.model_json_schema()
