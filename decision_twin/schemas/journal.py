"""Journal Schemas — import/export shapes for external journaling tools."""

from pydantic import Field, field_validator

from decision_twin.schemas.base import CamelModel


class ParsedDecision(CamelModel):
    """A decision extracted from CSV or free text, not yet saved."""
    title: str
    choice: str = ""
    category: str = "Other"
    confidence: int = 50
    alternatives: list[str] = Field(default_factory=list)
    context: str = ""
    tags: list[str] = Field(default_factory=list)
    date: str | None = None

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v):
        try:
            return max(0, min(100, int(v)))
        except (TypeError, ValueError):
            return 50


class JournalExport(CamelModel):
    filename: str
    content: str
    media_type: str


class CsvImport(CamelModel):
    content: str = Field(max_length=1_000_000)


class TextImport(CamelModel):
    text: str = Field(min_length=1, max_length=20_000)
