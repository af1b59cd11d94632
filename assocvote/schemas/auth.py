"""Authentication schemas."""
from pydantic import BaseModel, Field

from assocvote.db.models.enums import UserRole


class CurrentUser(BaseModel):
    """Identity carried by a verified access token."""

    id: str = Field(..., min_length=1)
    role: UserRole = UserRole.MEMBER
    association_id: str = Field(..., min_length=1)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
