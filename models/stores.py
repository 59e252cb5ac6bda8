"""Profile and plan stores.

Each store is a keyed persistence capability injected into the orchestrator.
The in-memory backend keeps records for the lifetime of the process; the
MongoDB backend stores the same records as nested documents.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from schemas.profile import Profile, ProfileCreate
from services.errors import StorageError
from utils.logger import setup_logger

logger = setup_logger(__name__)

DocT = TypeVar("DocT", bound=BaseModel)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProfileStore(ABC):
    """One profile record per user; no update or delete."""

    @abstractmethod
    async def put(self, profile: ProfileCreate) -> Profile:
        """Store a new profile under a fresh id and return the stored record."""

    @abstractmethod
    async def get(self, profile_id: str) -> Optional[Profile]:
        """Return the profile, or None when it does not exist."""


class PlanStore(ABC, Generic[DocT]):
    """At most one live document of one kind per user, replaced on upsert."""

    def __init__(self, document_cls: Type[DocT], kind: str):
        self.document_cls = document_cls
        self.kind = kind

    @abstractmethod
    async def get(self, user_id: str) -> Optional[DocT]:
        """Return the user's current document, or None."""

    @abstractmethod
    async def upsert(self, user_id: str, content: BaseModel) -> DocT:
        """Create or replace the user's document.

        On replace the existing id and created_at are kept and every content
        field is overwritten.
        """

    @abstractmethod
    async def count(self, user_id: str) -> int:
        """Number of live documents for the user (0 or 1)."""

    def _build(self, doc_id: str, user_id: str, created_at: datetime, content: BaseModel) -> DocT:
        return self.document_cls.model_validate({
            **content.model_dump(),
            "id": doc_id,
            "user_id": user_id,
            "created_at": created_at,
        })


class InMemoryProfileStore(ProfileStore):
    """Process-lifetime profile store."""

    def __init__(self, max_records: int = 0):
        self.max_records = max_records
        self._profiles: Dict[str, Profile] = {}
        self._lock = asyncio.Lock()

    async def put(self, profile: ProfileCreate) -> Profile:
        async with self._lock:
            if self.max_records and len(self._profiles) >= self.max_records:
                raise StorageError(f"Profile store is full ({self.max_records} records)")
            stored = Profile.model_validate({**profile.model_dump(), "id": _new_id()})
            self._profiles[stored.id] = stored
        logger.info(f"Stored profile {stored.id}")
        return stored.model_copy(deep=True)

    async def get(self, profile_id: str) -> Optional[Profile]:
        profile = self._profiles.get(profile_id)
        return profile.model_copy(deep=True) if profile else None


class InMemoryPlanStore(PlanStore[DocT]):
    """Process-lifetime plan store keyed by user id."""

    def __init__(self, document_cls: Type[DocT], kind: str, max_records: int = 0):
        super().__init__(document_cls, kind)
        self.max_records = max_records
        self._documents: Dict[str, DocT] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: str) -> Optional[DocT]:
        document = self._documents.get(user_id)
        return document.model_copy(deep=True) if document else None

    async def upsert(self, user_id: str, content: BaseModel) -> DocT:
        async with self._lock:
            existing = self._documents.get(user_id)
            if existing is not None:
                document = self._build(existing.id, user_id, existing.created_at, content)
            else:
                if self.max_records and len(self._documents) >= self.max_records:
                    raise StorageError(f"{self.kind} store is full ({self.max_records} records)")
                document = self._build(_new_id(), user_id, _utcnow(), content)
            self._documents[user_id] = document

        action = "Replaced" if existing is not None else "Created"
        logger.info(f"{action} {self.kind} {document.id} for user {user_id}")
        return document.model_copy(deep=True)

    async def count(self, user_id: str) -> int:
        return 1 if user_id in self._documents else 0


def _strip_mongo_id(document: Dict[str, Any]) -> Dict[str, Any]:
    document.pop("_id", None)
    return document


class MongoProfileStore(ProfileStore):
    """Profile store backed by a motor collection."""

    def __init__(self, collection):
        self.collection = collection

    async def put(self, profile: ProfileCreate) -> Profile:
        stored = Profile.model_validate({**profile.model_dump(), "id": _new_id()})
        try:
            await self.collection.insert_one(stored.model_dump(mode="json"))
        except PyMongoError as e:
            logger.error(f"Error storing profile: {e}", exc_info=True)
            raise StorageError(f"Failed to store profile: {e}") from e
        logger.info(f"Stored profile {stored.id}")
        return stored

    async def get(self, profile_id: str) -> Optional[Profile]:
        try:
            document = await self.collection.find_one({"id": profile_id})
        except PyMongoError as e:
            logger.error(f"Error fetching profile {profile_id}: {e}", exc_info=True)
            raise StorageError(f"Failed to fetch profile: {e}") from e
        if not document:
            return None
        return Profile.model_validate(_strip_mongo_id(document))


class MongoPlanStore(PlanStore[DocT]):
    """Plan store backed by a motor collection with a unique user_id index."""

    def __init__(self, collection, document_cls: Type[DocT], kind: str):
        super().__init__(document_cls, kind)
        self.collection = collection

    async def get(self, user_id: str) -> Optional[DocT]:
        try:
            document = await self.collection.find_one({"user_id": user_id})
        except PyMongoError as e:
            logger.error(f"Error fetching {self.kind} for user {user_id}: {e}", exc_info=True)
            raise StorageError(f"Failed to fetch {self.kind}: {e}") from e
        if not document:
            return None
        return self.document_cls.model_validate(_strip_mongo_id(document))

    async def upsert(self, user_id: str, content: BaseModel) -> DocT:
        try:
            document = await self.collection.find_one_and_update(
                {"user_id": user_id},
                {
                    "$set": content.model_dump(mode="json"),
                    "$setOnInsert": {
                        "id": _new_id(),
                        "user_id": user_id,
                        "created_at": _utcnow(),
                    },
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Error upserting {self.kind} for user {user_id}: {e}", exc_info=True)
            raise StorageError(f"Failed to save {self.kind}: {e}") from e

        logger.info(f"Saved {self.kind} {document['id']} for user {user_id}")
        return self.document_cls.model_validate(_strip_mongo_id(document))

    async def count(self, user_id: str) -> int:
        try:
            return await self.collection.count_documents({"user_id": user_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to count {self.kind}: {e}") from e
