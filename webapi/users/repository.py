# In-memory user repository
import threading
import uuid
from dataclasses import replace
from typing import Dict, Optional, Tuple

from webapi.users.models import Page, UserEntity


class InMemoryUserRepository:
    """
    Thread-safe in-memory store of users.

    Records keep insertion order, which is the ordering used for paging.
    Every call returns copies so callers never hold on to stored records.
    """

    def __init__(self):
        self._users: Dict[uuid.UUID, UserEntity] = {}
        self._lock = threading.RLock()

    def find_by_id(self, user_id: uuid.UUID) -> Optional[UserEntity]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user is not None else None

    def insert(self, user: UserEntity) -> UserEntity:
        with self._lock:
            user_id = uuid.uuid4()
            while user_id in self._users:
                user_id = uuid.uuid4()
            stored = replace(user, id=user_id)
            self._users[user_id] = stored
            return replace(stored)

    def update_or_insert(self, user: UserEntity) -> Tuple[UserEntity, bool]:
        """Overwrite the record with ``user.id`` or create it under that id."""
        if user.id is None:
            raise ValueError("update_or_insert requires a caller-supplied id")
        with self._lock:
            existing = self._users.get(user.id)
            if existing is None:
                self._users[user.id] = replace(user)
                return replace(user), True
            self._copy_fields(user, existing)
            return replace(existing), False

    def update(self, user: UserEntity) -> None:
        with self._lock:
            existing = self._users.get(user.id)
            if existing is not None:
                self._copy_fields(user, existing)

    def delete(self, user_id: uuid.UUID) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def get_page(self, page_number: int, page_size: int) -> Page[UserEntity]:
        if page_number < 1 or page_size < 1:
            raise ValueError("page_number and page_size must be positive")
        with self._lock:
            start = (page_number - 1) * page_size
            ordered = list(self._users.values())
            items = [replace(u) for u in ordered[start:start + page_size]]
            return Page(
                items=items,
                current_page=page_number,
                page_size=page_size,
                total_count=len(ordered),
            )

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    @staticmethod
    def _copy_fields(source: UserEntity, target: UserEntity) -> None:
        target.login = source.login
        target.first_name = source.first_name
        target.last_name = source.last_name
