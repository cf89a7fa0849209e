from typing import Optional

from mealhub.domain.User import User
from mealhub.domain.errors import NotFoundError, ValidationError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.utilities.constants import USERS
from mealhub.utilities.timestamps import now_iso


class UserRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self, user_id: str) -> Optional[User]:
        data = self.store.get(USERS, user_id) if user_id else None
        return User.from_dict(data, id=user_id) if data is not None else None

    def create(self, name: str, email: str, user_id: Optional[str] = None) -> User:
        ts = now_iso()
        doc = {'name': name, 'email': email, 'createdAt': ts, 'updatedAt': ts}
        if user_id:
            self.store.set(USERS, user_id, doc)
        else:
            user_id = self.store.add(USERS, doc)
        return User.from_dict(doc, id=user_id)

    def update_profile(self, user_id: str, name: str, email: str) -> User:
        if not name or not email:
            raise ValidationError("Name and email are required")
        if not self.store.update(USERS, user_id, {'name': name, 'email': email, 'updatedAt': now_iso()}):
            raise NotFoundError("User profile not found")
        return self.get(user_id)
