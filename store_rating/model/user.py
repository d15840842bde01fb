from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from store_rating.auth.permissions import Role
from store_rating.model.base import Base, new_id, utcnow


class User(Base):
    __tablename__ = "user"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String(60), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    address = Column(String(400), nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.NORMAL_USER)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owned_stores = relationship("Store", back_populates="owner")
    ratings = relationship("Rating", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
