import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Role
from store_rating.auth.utils import Identity
from store_rating.core.errors import Conflict, Forbidden, NotFound, ValidationError
from store_rating.model.rating_schema import RaterInfo, StoreRatingEntry, StoreRatingsResponse
from store_rating.model.store import Store
from store_rating.model.store_schema import StoreCreate, StoreResponse, StoreWithRating
from store_rating.repository import rating as rating_repository
from store_rating.repository import store as store_repository
from store_rating.repository import user as user_repository
from store_rating.repository.store import STORE_SORT_FIELDS, StoreFilter
from store_rating.service.query import parse_sort
from store_rating.service.rating import aggregate
from store_rating.service.user import check_address, check_email

logger = logging.getLogger(__name__)

STORE_EMAIL_TAKEN_MESSAGE = "Store with this email already exists"


def to_store_response(store: Store) -> StoreResponse:
    return StoreResponse(
        id=store.id,
        name=store.name,
        email=store.email,
        address=store.address,
        owner_name=store.owner.name if store.owner else None,
        owner_email=store.owner.email if store.owner else None,
        created_at=store.created_at,
    )


def create_store(db: Session, data: StoreCreate) -> Store:
    if not (data.name and data.email and data.address and data.owner_id):
        raise ValidationError("All fields are required")
    check_email(data.email)
    check_address(data.address)

    owner = user_repository.get_user(db, id=data.owner_id)
    if not owner or owner.role != Role.STORE_OWNER:
        raise ValidationError("Owner must be a store owner", field="owner_id")

    if store_repository.get_store(db, email=data.email):
        raise Conflict(STORE_EMAIL_TAKEN_MESSAGE)

    try:
        store = store_repository.create_store(
            db,
            name=data.name,
            email=data.email,
            address=data.address,
            owner_id=owner.id,
        )
    except IntegrityError:
        db.rollback()
        raise Conflict(STORE_EMAIL_TAKEN_MESSAGE)

    logger.info("Store created: id=%s owner=%s", store.id, owner.id)
    return store


def list_stores(
    db: Session,
    filters: StoreFilter,
    sort_by: str = "name",
    sort_order: str = "asc",
    viewer: Optional[Identity] = None,
) -> List[StoreWithRating]:
    """
    Stores with their rating aggregates.

    A normal-user viewer also gets their own score for each store.
    """
    field, descending = parse_sort(sort_by, sort_order, STORE_SORT_FIELDS)
    stores = store_repository.get_stores(db, filters, sort_by=field, descending=descending)
    store_ids = [s.id for s in stores]
    scores = store_repository.get_scores_by_store(db, store_ids) if store_ids else {}

    own = {}
    if viewer is not None and viewer.role == Role.NORMAL_USER and store_ids:
        own = rating_repository.get_user_ratings(db, viewer.subject_id, store_ids)

    results = []
    for store in stores:
        agg = aggregate(scores.get(store.id, []))
        results.append(
            StoreWithRating(
                **to_store_response(store).model_dump(),
                average_rating=agg.average,
                total_ratings=agg.count,
                my_rating=own.get(store.id),
            )
        )
    return results


def list_owned_stores(db: Session, owner: Identity) -> List[StoreWithRating]:
    return list_stores(db, StoreFilter(owner_id=owner.subject_id))


def get_store_or_404(db: Session, store_id: str) -> Store:
    store = store_repository.get_store(db, id=store_id)
    if not store:
        raise NotFound("Store not found")
    return store


def get_store_ratings(db: Session, owner: Identity, store_id: str) -> StoreRatingsResponse:
    """All ratings of a store, newest first, for the store's owner."""
    store = get_store_or_404(db, store_id)
    if store.owner_id != owner.subject_id:
        raise Forbidden("You can only view ratings for your own stores")

    ratings = rating_repository.get_store_ratings(db, store.id)
    agg = aggregate([r.rating for r in ratings])
    entries = [
        StoreRatingEntry(
            id=r.id,
            user_id=r.user_id,
            store_id=r.store_id,
            rating=r.rating,
            created_at=r.created_at,
            updated_at=r.updated_at,
            user=RaterInfo(name=r.user.name, email=r.user.email, address=r.user.address),
        )
        for r in ratings
    ]
    return StoreRatingsResponse(
        store_id=store.id,
        average_rating=agg.average,
        total_ratings=agg.count,
        ratings=entries,
    )
