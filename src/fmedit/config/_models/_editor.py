"""Editor configuration model.

Controls the placeholder keys used when a new field, array or section is
added to a document, and how many numbered variants are probed before key
allocation gives up.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EditorConfig(BaseModel):
    """Editor configuration section.

    Attributes:
        field_key: Placeholder key base for new scalar fields.
        array_key: Placeholder key base for new arrays.
        section_key: Placeholder key base for new sections.
        max_key_probes: Upper bound on numbered suffixes tried per allocation.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    field_key: str = "new_field"
    array_key: str = "new_array"
    section_key: str = "new_section"
    max_key_probes: int = Field(default=1000, ge=1)

    @field_validator("field_key", "array_key", "section_key")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "placeholder key must not be blank"
            raise ValueError(msg)
        return stripped
