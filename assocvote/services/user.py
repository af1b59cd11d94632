"""User lookups used by the voting services."""
from sqlalchemy.orm import Session

from assocvote.core.exceptions import NotFoundError
from assocvote.db.models import User


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user
