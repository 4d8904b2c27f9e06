"""MongoDB connection lifecycle.

The application factory constructs one MongoConnection, hands its database to
the repositories and closes it on shutdown. Nothing in the package reaches for
a module-level client.
"""

import logging

from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)


class MongoConnection:
    """Owns a MongoClient and the database the service works in."""

    def __init__(self, uri: str, db_name: str, client: MongoClient | None = None) -> None:
        """Initialize the connection.

        Args:
            uri: MongoDB connection string
            db_name: Name of the database holding the service collections
            client: Optional pre-built client (used by tests)

        Raises:
            ValueError: If uri or db_name is empty
        """
        if not uri:
            raise ValueError("MongoDB connection URI must be provided")
        if not db_name:
            raise ValueError("MongoDB database name must be provided")

        self.uri = uri
        self.db_name = db_name
        # tz_aware keeps stored UTC timestamps timezone-aware on the way back out
        self.client: MongoClient = client or MongoClient(uri, tz_aware=True)
        self._closed = False

    @property
    def database(self) -> Database:
        """Return the service database."""
        return self.client[self.db_name]

    def ping(self) -> bool:
        """Check that the server answers.

        Returns:
            bool: True if the ping command succeeded
        """
        result = self.client.admin.command("ping")
        return bool(result.get("ok"))

    def close(self) -> None:
        """Close the underlying client. Safe to call more than once."""
        if self._closed:
            return
        self.client.close()
        self._closed = True
        logger.info(f"MongoDB connection to database '{self.db_name}' closed")
