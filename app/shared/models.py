"""
Shared Models

Base classes for API schemas and helpers for turning MongoDB documents into
response payloads.
"""

from typing import Any, Dict
from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from app.shared.exceptions import ValidationError


class CamelModel(BaseModel):
    """
    Base schema for the HTTP surface.

    Python attributes and stored documents use snake_case; JSON uses
    camelCase (walletAddress, upiId, kycStatus, ...). Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def document_to_dict(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prepare a stored document for schema validation.

    Renames _id to id (stringified) at every nesting level so embedded
    subdocuments such as transactions keep their identifiers.
    """
    result: Dict[str, Any] = {}
    for key, value in doc.items():
        if key == "_id":
            result["id"] = str(value)
        elif isinstance(value, dict):
            result[key] = document_to_dict(value)
        elif isinstance(value, list):
            result[key] = [
                document_to_dict(item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def parse_object_id(value: str, label: str = "id") -> ObjectId:
    """
    Parse a client-supplied identifier.

    Raises:
        ValidationError: If value is not a 24-character hex ObjectId
    """
    if not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid {label}")
    return ObjectId(value)
