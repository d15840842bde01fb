from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from store_rating.auth.permissions import Role


class DashboardStats(BaseModel):
    total_users: int
    total_stores: int
    total_ratings: int


class RecentUser(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None


class RecentStore(BaseModel):
    id: str
    name: str
    email: str
    address: str
    owner_name: Optional[str] = None
    created_at: Optional[datetime] = None


class RecentRating(BaseModel):
    id: str
    rating: int
    user_name: Optional[str] = None
    store_name: Optional[str] = None
    created_at: Optional[datetime] = None


class RecentActivity(BaseModel):
    users: List[RecentUser]
    stores: List[RecentStore]
    ratings: List[RecentRating]


class TopRatedStore(BaseModel):
    id: str
    name: str
    average_rating: float
    total_ratings: int


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_activity: RecentActivity
    top_rated_stores: List[TopRatedStore]
