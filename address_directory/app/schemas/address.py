"""
Pydantic schemas for address records.

``AddressRecordDTO`` is the wire representation exchanged with
clients.  It is used for request bodies (create and update) and for
responses.  Field names are camelCase on the wire (``zipCode``,
``createdAt``, ``updatedAt``); snake_case names are accepted on input
too.  ``id`` and the timestamps are accepted but ignored on input:
they are always assigned by the store.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AddressRecordDTO(BaseModel):
    """Wire representation of one address record."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, examples=[1])
    name: str = Field(..., max_length=100, examples=["Jane Doe"])
    phone: Optional[str] = Field(None, max_length=20, examples=["+1-312-555-0100"])
    email: Optional[str] = Field(None, max_length=100, examples=["jane@test.com"])
    street: Optional[str] = Field(None, max_length=255, examples=["233 S Wacker Dr"])
    city: Optional[str] = Field(None, max_length=100, examples=["Chicago"])
    state: Optional[str] = Field(None, max_length=100, examples=["IL"])
    zip_code: Optional[str] = Field(None, max_length=20, alias="zipCode", examples=["60606"])
    country: Optional[str] = Field(None, max_length=100, examples=["USA"])
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_absent(cls, v: Any) -> Any:
        # An empty string carries no address; it is not an invalid one.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        # Bare addresses only; the display-name form "Jane <jane@test.com>"
        # is rejected.  The value is stored as given, not normalised.
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError("Email must be valid") from exc
        return v


def field_errors(errors: Iterable[Dict[str, Any]], skip_prefix: bool = False) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs.

    ``skip_prefix`` drops the leading location element that FastAPI
    adds to request errors (``body``, ``query``, ``path``).
    """
    flattened = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if skip_prefix and len(loc) > 1:
            loc = loc[1:]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        flattened.append({"field": ".".join(str(part) for part in loc), "message": message})
    return flattened
