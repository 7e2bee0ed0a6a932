from __future__ import annotations

import uuid
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


FIELD_NAMES = ("firstName", "lastName", "idNumber", "phone", "email")


def new_record_id() -> str:
    return uuid.uuid4().hex


class StudentRecord(BaseModel):
    """App/storage record shape. Serialized with camelCase keys, as in the seed asset."""

    id: str = Field(default_factory=new_record_id)
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    id_number: str = Field(default="", alias="idNumber")
    phone: str = ""
    email: str = ""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("first_name", "last_name", "id_number", "phone", "email", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        # A reset form stores null for every field
        return "" if value is None else value

    @classmethod
    def from_fields(cls, fields: Dict[str, Any], record_id: str | None = None) -> "StudentRecord":
        """Build a record from form values keyed by camelCase field name."""
        data = {name: ("" if fields.get(name) is None else str(fields.get(name))) for name in FIELD_NAMES}
        if record_id:
            data["id"] = record_id
        return cls.model_validate(data)

    def fields(self) -> Dict[str, str]:
        data = self.model_dump(by_alias=True)
        return {name: data[name] for name in FIELD_NAMES}

    def same_fields(self, other: "StudentRecord") -> bool:
        # Identity used by legacy selections that carry no id
        return self.fields() == other.fields()

    def to_storage(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)
