"""Helpers for turning request-path identifiers into document ids."""

from bson import ObjectId

from restaurant_ordering_service.errors import ValidationError


def parse_object_id(raw_id: str, label: str) -> ObjectId:
    """Parse a 24-hex-character identifier.

    Args:
        raw_id: Identifier as received from the client
        label: Entity name used in the error message

    Returns:
        ObjectId: Parsed identifier

    Raises:
        ValidationError: If the identifier is not well formed
    """
    if not ObjectId.is_valid(raw_id):
        raise ValidationError(f"Invalid {label} id")
    return ObjectId(raw_id)
