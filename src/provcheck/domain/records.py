"""Record model: one provisioning request as handed to the engine.

Records come from an external source, so field spellings vary: the
Salesforce export uses ``Id``/``Name``/``Payload_Data__c`` while other
tools emit ``id``/``name``/``payloadRaw``. All spellings are accepted.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class Record(BaseModel):
    """A deployment request record carrying a raw JSON payload string."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(validation_alias=AliasChoices("id", "Id", "recordId"))
    name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("name", "Name", "recordName"),
    )
    payload_raw: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "payload_raw",
            "payloadRaw",
            "Payload_Data__c",
            "payload",
        ),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("payload_raw", mode="before")
    @classmethod
    def _encode_payload(cls, value: Any) -> Any:
        # Files may embed the payload as an object, number or bool.
        if value is not None and not isinstance(value, str):
            return json.dumps(value)
        return value

    @property
    def display_name(self) -> str:
        return self.name or "Unknown"
