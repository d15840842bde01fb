from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt


class RatingSubmit(BaseModel):
    store_id: str
    rating: StrictInt


class RatingResponse(BaseModel):
    id: str
    user_id: str
    store_id: str
    rating: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RatingSubmitResponse(BaseModel):
    message: str
    created: bool
    rating: RatingResponse


class OwnRatingResponse(BaseModel):
    store_id: str
    rating: Optional[int] = None


class RaterInfo(BaseModel):
    name: str
    email: str
    address: str


class StoreRatingEntry(RatingResponse):
    user: RaterInfo


class StoreRatingsResponse(BaseModel):
    store_id: str
    average_rating: Optional[float] = None
    total_ratings: int
    ratings: List[StoreRatingEntry]
