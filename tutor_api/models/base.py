"""
tutor_api/models/base.py

Shared Pydantic configuration for the HTTP DTOs.

The browser client speaks camelCase; Python code uses snake_case.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """BaseModel that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        """Dump with camelCase keys, ready for a JSONResponse."""
        return self.model_dump(by_alias=True, mode="json")


def not_blank(value: str) -> str:
    """Reject blank or whitespace-only text."""
    if not value or not value.strip():
        raise ValueError("must not be empty.")
    return value


#: Required free-text field; blank or whitespace-only input is rejected.
NonBlankStr = Annotated[str, AfterValidator(not_blank)]
