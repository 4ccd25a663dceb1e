"""Schema Base — camelCase aliasing and UTC coercion shared by persisted entities.

Invariants:
    - Python attributes are snake_case; JSON keys are camelCase
    - Both spellings accepted on input (populate_by_name)
    - Datetime fields always come out timezone-aware UTC
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from decision_twin.core.clock import as_utc, to_iso

UtcDatetime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(to_iso, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for anything persisted in the key-value store."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
    )

    def to_json(self) -> str:
        """Serialize with camelCase keys, omitting unset optionals."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
