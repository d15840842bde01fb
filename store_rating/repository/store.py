from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from store_rating.model.rating import Rating
from store_rating.model.store import Store

STORE_SORT_FIELDS = {
    "name": Store.name,
    "email": Store.email,
    "address": Store.address,
    "created_at": Store.created_at,
}


@dataclass
class StoreFilter:
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    owner_id: Optional[str] = None


def create_store(db: Session, name: str, email: str, address: str, owner_id: str) -> Store:
    new_store = Store(
        name=name,
        email=email,
        address=address,
        owner_id=owner_id,
    )
    db.add(new_store)
    db.commit()
    db.refresh(new_store)
    return new_store


def get_store(db: Session, id: Optional[str] = None, email: Optional[str] = None) -> Optional[Store]:
    query = db.query(Store)
    if id:
        query = query.filter(Store.id == id)
    if email:
        query = query.filter(Store.email == email)
    return query.first()


def get_stores(db: Session, filters: StoreFilter, sort_by: str = "name", descending: bool = False) -> List[Store]:
    query = db.query(Store).options(joinedload(Store.owner))
    if filters.name:
        query = query.filter(Store.name.ilike(f"%{filters.name}%"))
    if filters.email:
        query = query.filter(Store.email.ilike(f"%{filters.email}%"))
    if filters.address:
        query = query.filter(Store.address.ilike(f"%{filters.address}%"))
    if filters.owner_id:
        query = query.filter(Store.owner_id == filters.owner_id)
    column = STORE_SORT_FIELDS[sort_by]
    query = query.order_by(column.desc() if descending else column.asc(), Store.id)
    return query.all()


def get_scores_by_store(db: Session, store_ids: Optional[Iterable[str]] = None) -> Dict[str, List[int]]:
    """Map each store id to the list of its rating values."""
    query = db.query(Rating.store_id, Rating.rating)
    if store_ids is not None:
        query = query.filter(Rating.store_id.in_(list(store_ids)))
    scores: Dict[str, List[int]] = {}
    for store_id, value in query.all():
        scores.setdefault(store_id, []).append(value)
    return scores


def get_scores_by_owner(db: Session, owner_ids: Iterable[str]) -> Dict[str, List[int]]:
    """Map each owner id to the rating values across all their stores."""
    query = (
        db.query(Store.owner_id, Rating.rating)
        .join(Rating, Rating.store_id == Store.id)
        .filter(Store.owner_id.in_(list(owner_ids)))
    )
    scores: Dict[str, List[int]] = {}
    for owner_id, value in query.all():
        scores.setdefault(owner_id, []).append(value)
    return scores


def count_stores(db: Session) -> int:
    return db.query(Store).count()


def recent_stores(db: Session, limit: int = 5) -> List[Store]:
    return (
        db.query(Store)
        .options(joinedload(Store.owner))
        .order_by(Store.created_at.desc())
        .limit(limit)
        .all()
    )
