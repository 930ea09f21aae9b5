# piloo/schemas/base.py
"""
Shared schema bases.
Fields are snake_case in Python and camelCase on the wire; both spellings are accepted on input.
"""

from datetime import datetime, timezone
from typing import Annotated, ClassVar, Optional, Tuple
from pydantic import AfterValidator, BaseModel, model_validator
from pydantic.alias_generators import to_camel


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC; convert aware inputs before comparing."""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDateTime = Annotated[datetime, AfterValidator(as_naive_utc)]


class ApiModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PatchModel(ApiModel):
    """
    Partial update body. Every field is optional; only the fields the client
    actually sent are applied. Columns that are NOT NULL in the table must be
    listed in `required_fields` so an explicit null is rejected up front.
    """

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in self.required_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
