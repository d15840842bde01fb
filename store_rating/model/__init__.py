from store_rating.model.base import Base
from store_rating.model.user import User
from store_rating.model.store import Store
from store_rating.model.rating import Rating

__all__ = ["Base", "User", "Store", "Rating"]
