from pathlib import Path

import pytest

from fmedit.config import (
    ConfigSource,
    ConfigSourceName,
    ConfigValidationError,
    ValidationIssue,
    get_config_schema,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)


class TestValidateConfig:
    def test_valid_config(self) -> None:
        assert validate_config({"editor": {"field_key": "field"}}) == []

    def test_unknown_keys_ignored_when_lenient(self) -> None:
        assert validate_config({"editor": {"feild_key": "x"}, "other": 1}) == []

    def test_unknown_keys_reported_when_strict(self) -> None:
        issues = validate_config({"editor": {"feild_key": "x"}}, strict=True)

        assert [issue.key for issue in issues] == ["editor.feild_key"]
        assert issues[0].severity == "error"

    def test_bad_enum_reports_expected_values(self) -> None:
        (issue,) = validate_config({"logging": {"format": "xml"}})

        assert issue.key == "logging.format"
        assert issue.actual == "xml"
        assert issue.expected is not None
        assert "json" in issue.expected

    def test_lower_bound_reported(self) -> None:
        (issue,) = validate_config({"editor": {"max_key_probes": 0}})

        assert issue.expected == ">= 1"


class TestValidateSource:
    def test_missing_source_has_no_issues(self, tmp_path: Path) -> None:
        source = ConfigSource(
            name=ConfigSourceName.USER,
            path=tmp_path / "config.toml",
            exists=False,
            values={"editor": {"max_key_probes": 0}},
        )

        assert validate_source(source) == []

    def test_issues_tagged_with_source(self) -> None:
        source = ConfigSource(
            name=ConfigSourceName.ENV,
            path=None,
            exists=True,
            values={"editor": {"max_key_probes": "many"}},
        )

        (issue,) = validate_source(source)

        assert issue.source == "env"


class TestRaiseIfValidationErrors:
    def test_no_errors(self) -> None:
        raise_if_validation_errors([])

    def test_raises_first_error(self) -> None:
        issues = [
            ValidationIssue(
                key="editor.field_key",
                message="placeholder key must not be blank",
                expected=None,
                actual="",
                source="project",
                severity="error",
            )
        ]

        with pytest.raises(ConfigValidationError) as exc_info:
            raise_if_validation_errors(issues)

        assert exc_info.value.key == "editor.field_key"
        assert exc_info.value.expected == "placeholder key must not be blank"
        assert exc_info.value.source == "project"

    def test_warnings_do_not_raise(self) -> None:
        issues = [
            ValidationIssue(
                key="editor.field_key",
                message="unused",
                expected=None,
                actual="x",
                source=None,
                severity="warning",
            )
        ]

        raise_if_validation_errors(issues)


class TestGetConfigSchema:
    def test_has_sections(self) -> None:
        schema = get_config_schema()

        assert sorted(schema["properties"]) == ["editor", "logging"]

    def test_strict_forbids_additional_properties(self) -> None:
        schema = get_config_schema(strict=True)

        assert schema["additionalProperties"] is False
