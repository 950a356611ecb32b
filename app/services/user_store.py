# In-memory user store
import logging
import threading
from dataclasses import replace
from typing import Iterable, List, Optional

from app.core.exceptions import NotFoundError
from app.models.user import Role, User

LOGGER = logging.getLogger(__name__)


class UserStore:
    """
    Process-lifetime, ordered collection of users.

    Every mutation holds the store's lock, so concurrent requests served from
    the threadpool see a consistent sequence.
    """

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: List[User] = list(users or [])
        self._lock = threading.Lock()

    def find_all(self, role: Optional[Role] = None) -> List[User]:
        with self._lock:
            if role is None:
                return list(self._users)
            return [user for user in self._users if user.role == role]

    def find_one(self, user_id: int) -> User:
        with self._lock:
            return self._users[self._index_of(user_id)]

    def create(self, name: str, email: str, role: Role) -> User:
        with self._lock:
            next_id = max((user.id for user in self._users), default=0) + 1
            user = User(id=next_id, name=name, email=email, role=role)
            self._users.append(user)
        LOGGER.info("Created user %s", user.id)
        return user

    def update(self, user_id: int, **changes) -> User:
        with self._lock:
            index = self._index_of(user_id)
            updated = replace(self._users[index], **changes)
            self._users[index] = updated
        LOGGER.info("Updated user %s fields=%s", user_id, sorted(changes))
        return updated

    def delete(self, user_id: int) -> User:
        with self._lock:
            removed = self._users.pop(self._index_of(user_id))
        LOGGER.info("Deleted user %s", user_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._users.clear()

    def _index_of(self, user_id: int) -> int:
        # Caller holds the lock
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        raise NotFoundError("User Not Found")


user_store = UserStore()
