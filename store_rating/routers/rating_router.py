from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Operation, Role, requires, requires_any
from store_rating.auth.utils import Identity
from store_rating.core.errors import ValidationError
from store_rating.db.session import get_db
from store_rating.model.rating_schema import (
    OwnRatingResponse,
    RatingResponse,
    RatingSubmit,
    RatingSubmitResponse,
    StoreRatingsResponse,
)
from store_rating.service import rating as rating_service
from store_rating.service import store as store_service

router = APIRouter(prefix="/api/ratings", tags=["Rating"])


@router.post("/", response_model=RatingSubmitResponse)
def submit_rating(
    data: RatingSubmit,
    identity: Identity = Depends(requires(Operation.SUBMIT_RATING)),
    db: Session = Depends(get_db),
):
    result = rating_service.submit_rating(db, identity.subject_id, data.store_id, data.rating)
    message = "Rating submitted successfully" if result.created else "Rating updated successfully"
    return RatingSubmitResponse(
        message=message,
        created=result.created,
        rating=RatingResponse.model_validate(result.rating),
    )


@router.get("/", response_model=Union[StoreRatingsResponse, OwnRatingResponse])
def get_ratings(
    store_id: Optional[str] = Query(None),
    identity: Identity = Depends(requires_any(Operation.VIEW_STORE_RATINGS, Operation.VIEW_OWN_RATING)),
    db: Session = Depends(get_db),
):
    if not store_id:
        raise ValidationError("store_id is required", field="store_id")
    if identity.role == Role.STORE_OWNER:
        return store_service.get_store_ratings(db, identity, store_id)
    return OwnRatingResponse(
        store_id=store_id,
        rating=rating_service.get_own_rating(db, identity.subject_id, store_id),
    )
