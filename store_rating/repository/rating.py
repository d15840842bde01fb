from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from store_rating.model.rating import Rating


def get_rating(db: Session, user_id: str, store_id: str) -> Optional[Rating]:
    return (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.store_id == store_id)
        .first()
    )


def insert_rating(db: Session, user_id: str, store_id: str, score: int) -> Rating:
    new_rating = Rating(user_id=user_id, store_id=store_id, rating=score)
    db.add(new_rating)
    db.commit()
    db.refresh(new_rating)
    return new_rating


def update_rating(db: Session, rating: Rating, score: int) -> Rating:
    rating.rating = score
    db.commit()
    db.refresh(rating)
    return rating


def get_user_ratings(db: Session, user_id: str, store_ids: Optional[Iterable[str]] = None) -> Dict[str, int]:
    """Map store id to the given user's score."""
    query = db.query(Rating.store_id, Rating.rating).filter(Rating.user_id == user_id)
    if store_ids is not None:
        query = query.filter(Rating.store_id.in_(list(store_ids)))
    return {store_id: value for store_id, value in query.all()}


def get_store_ratings(db: Session, store_id: str) -> List[Rating]:
    return (
        db.query(Rating)
        .options(joinedload(Rating.user))
        .filter(Rating.store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id)
        .all()
    )


def count_ratings(db: Session) -> int:
    return db.query(Rating).count()


def recent_ratings(db: Session, limit: int = 5) -> List[Rating]:
    return (
        db.query(Rating)
        .options(joinedload(Rating.user), joinedload(Rating.store))
        .order_by(Rating.created_at.desc())
        .limit(limit)
        .all()
    )
