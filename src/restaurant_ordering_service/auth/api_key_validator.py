"""API key validation for the menu admin endpoints."""

import hmac


class APIKeyValidator:
    """Validates admin API keys against a configured set of keys."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with the list of valid API keys.

        Args:
            api_keys: Valid API key strings (blank entries are ignored)

        Raises:
            ValueError: If no non-blank key is provided
        """
        keys = {key.strip() for key in api_keys if key.strip()}
        if not keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = keys

    def validate(self, api_key: str) -> bool:
        """Validate an API key using constant-time comparison.

        Args:
            api_key: The API key to validate

        Returns:
            bool: True if valid, False otherwise
        """
        return any(hmac.compare_digest(api_key, key) for key in self.api_keys)
