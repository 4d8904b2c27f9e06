"""FastAPI dependency helpers for admin API key checks."""

from fastapi import HTTPException

from restaurant_ordering_service.auth.api_key_validator import APIKeyValidator


def check_admin_api_key(x_api_key: str | None, validator: APIKeyValidator | None) -> str | None:
    """Validate the X-API-Key header for an admin endpoint.

    Args:
        x_api_key: Value of the X-API-Key header, if any
        validator: Configured validator, or None when admin auth is disabled

    Returns:
        The validated key, or None when admin auth is disabled

    Raises:
        HTTPException: 401 if the key is missing or invalid
    """
    if validator is None:
        return None

    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key
