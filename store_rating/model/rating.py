from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from store_rating.model.base import Base, new_id, utcnow


class Rating(Base):
    __tablename__ = "rating"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),
    )

    id = Column(String, primary_key=True, index=True, default=new_id)
    user_id = Column(String, ForeignKey("user.id"), index=True, nullable=False)
    store_id = Column(String, ForeignKey("store.id"), index=True, nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
