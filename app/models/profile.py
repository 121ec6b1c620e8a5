# app/models/profile.py
"""
Role assignment per authenticated identity.
id equals the identity provider's user id (the JWT `sub` claim).
"""

from sqlalchemy import Column, String
from app.database import Base
from app.models._columns import created_at, updated_at


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    email = Column(String(255))
    full_name = Column(String(200))
    role = Column(String(50), nullable=False)
    created_at = created_at()
    updated_at = updated_at()

    def __repr__(self):
        return f"<Profile {self.id} role={self.role}>"
