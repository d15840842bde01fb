from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StoreCreate(BaseModel):
    name: str
    email: str
    address: str
    owner_id: str


class StoreResponse(BaseModel):
    id: str
    name: str
    email: str
    address: str
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class StoreWithRating(StoreResponse):
    average_rating: Optional[float] = None
    total_ratings: int = 0
    my_rating: Optional[int] = None


class StoreEnvelope(BaseModel):
    message: str
    store: StoreResponse
