from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from store_rating.model.base import Base, new_id, utcnow


class Store(Base):
    __tablename__ = "store"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    address = Column(String(400), nullable=False)
    owner_id = Column(String, ForeignKey("user.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="owned_stores")
    ratings = relationship("Rating", back_populates="store", cascade="all, delete-orphan")
