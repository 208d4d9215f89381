"""
Cart persistence: repository contract, in-memory store and MongoDB store
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

from shopcart.config import Config
from shopcart.logging import get_logger
from shopcart.models import Cart


logger = get_logger("mongodb")


class CartRepository(ABC):
    """Storage contract for carts. ``save`` followed by ``load`` must round-trip every field."""

    @abstractmethod
    def load(self, session_id: str) -> Optional[Cart]:
        """Find the cart of a session, or None"""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Create or replace the cart of ``cart.session_id``"""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Delete a cart. Returns True if one was deleted."""

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """Check if a cart is stored for the session"""


class InMemoryCartRepository(CartRepository):
    """Dictionary-backed repository for development and tests"""

    def __init__(self):
        self._carts: Dict[str, Dict[str, Any]] = {}
        self.logger = get_logger("cart_repository", store="memory")

    def load(self, session_id: str) -> Optional[Cart]:
        document = self._carts.get(session_id)
        self.logger.debug("Load cart", session_id=session_id, found=document is not None)
        return Cart.from_dict(document)

    def save(self, cart: Cart) -> None:
        self._carts[cart.session_id.value] = cart.to_dict()
        self.logger.debug("Cart saved", session_id=cart.session_id.value, items=len(cart.items))

    def delete(self, session_id: str) -> bool:
        deleted = self._carts.pop(session_id, None) is not None
        self.logger.debug("Cart deleted", session_id=session_id, deleted=deleted)
        return deleted

    def exists(self, session_id: str) -> bool:
        return session_id in self._carts

    def clear(self) -> None:
        """Remove all carts"""
        self._carts.clear()

    def size(self) -> int:
        return len(self._carts)


class MongoDB:
    """MongoDB connection manager"""

    def __init__(self, config: Config):
        self.config = config
        self.client: Optional[MongoClient] = None
        self.db: Optional[Database] = None

    def connect(self) -> None:
        """Establish connection to MongoDB"""
        try:
            self.client = MongoClient(
                self.config.mongo_uri,
                serverSelectionTimeoutMS=self.config.mongo_timeout_ms,
                connectTimeoutMS=self.config.mongo_timeout_ms,
                tz_aware=True,
            )

            # Test connection
            self.client.admin.command("ping")

            self.db = self.client[self.config.mongo_db]
            self._create_indexes()

            logger.info("Connected to MongoDB",
                        uri=self.config.mongo_uri,
                        database=self.config.mongo_db)

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    def _create_indexes(self) -> None:
        carts = self.db.carts
        carts.create_index([("session_id", ASCENDING)], unique=True)
        carts.create_index([("updated_at", ASCENDING)])
        logger.info("Database indexes created")

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    def is_healthy(self) -> bool:
        """Check if MongoDB connection is healthy"""
        if not self.client:
            return False
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error("MongoDB health check failed", error=str(e))
            return False

    @property
    def carts(self) -> Collection:
        """Get carts collection"""
        return self.db.carts


class MongoCartRepository(CartRepository):
    """
    Repository storing one document per session in the ``carts`` collection.

    Timestamps are stored as ISO-8601 strings, BSON dates only keep milliseconds.
    """

    def __init__(self, mongodb: MongoDB):
        self.db = mongodb
        self.logger = get_logger("cart_repository", store="mongo")

    def load(self, session_id: str) -> Optional[Cart]:
        try:
            document = self.db.carts.find_one({"session_id": session_id}, {"_id": 0})
            self.logger.debug("Get cart", session_id=session_id, found=document is not None)
            return Cart.from_dict(document)
        except PyMongoError as e:
            self.logger.error("Error getting cart", session_id=session_id, error=str(e))
            raise

    def save(self, cart: Cart) -> None:
        session_id = cart.session_id.value
        try:
            self.db.carts.replace_one(
                {"session_id": session_id},
                _to_document(cart),
                upsert=True,
            )
            self.logger.info("Cart upserted", session_id=session_id, status=cart.status.value)
        except PyMongoError as e:
            self.logger.error("Error upserting cart", session_id=session_id, error=str(e))
            raise

    def delete(self, session_id: str) -> bool:
        try:
            result = self.db.carts.delete_one({"session_id": session_id})
            deleted = result.deleted_count > 0
            self.logger.info("Cart deleted", session_id=session_id, deleted=deleted)
            return deleted
        except PyMongoError as e:
            self.logger.error("Error deleting cart", session_id=session_id, error=str(e))
            raise

    def exists(self, session_id: str) -> bool:
        try:
            return self.db.carts.count_documents({"session_id": session_id}, limit=1) > 0
        except PyMongoError as e:
            self.logger.error("Error checking cart", session_id=session_id, error=str(e))
            raise


def _to_document(cart: Cart) -> Dict[str, Any]:
    document = cart.to_dict()
    for item in document["items"]:
        item["added_at"] = _isoformat(item["added_at"])
    document["created_at"] = _isoformat(document["created_at"])
    document["updated_at"] = _isoformat(document["updated_at"])
    return document


def _isoformat(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value
