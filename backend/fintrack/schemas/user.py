"""User Schemas — public view of the resolved caller."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    image_url: str
    created_at: datetime
