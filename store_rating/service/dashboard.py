from sqlalchemy.orm import Session

from store_rating.model.dashboard_schema import (
    DashboardResponse,
    DashboardStats,
    RecentActivity,
    RecentRating,
    RecentStore,
    RecentUser,
    TopRatedStore,
)
from store_rating.repository import rating as rating_repository
from store_rating.repository import store as store_repository
from store_rating.repository import user as user_repository
from store_rating.repository.store import StoreFilter
from store_rating.service.rating import TOP_RATED_LIMIT, aggregate, rank_top

RECENT_LIMIT = 5


def top_rated_stores(db: Session, k: int = TOP_RATED_LIMIT):
    stores = store_repository.get_stores(db, StoreFilter(), sort_by="created_at")
    names = {s.id: s.name for s in stores}
    scores = store_repository.get_scores_by_store(db)
    aggregates = {s.id: aggregate(scores.get(s.id, [])) for s in stores}
    return [
        TopRatedStore(id=entry.id, name=names[entry.id], average_rating=entry.average, total_ratings=entry.count)
        for entry in rank_top(aggregates, k)
    ]


def get_dashboard(db: Session) -> DashboardResponse:
    stats = DashboardStats(
        total_users=user_repository.count_users(db),
        total_stores=store_repository.count_stores(db),
        total_ratings=rating_repository.count_ratings(db),
    )
    activity = RecentActivity(
        users=[
            RecentUser(id=u.id, name=u.name, email=u.email, role=u.role, created_at=u.created_at)
            for u in user_repository.recent_users(db, RECENT_LIMIT)
        ],
        stores=[
            RecentStore(
                id=s.id,
                name=s.name,
                email=s.email,
                address=s.address,
                owner_name=s.owner.name if s.owner else None,
                created_at=s.created_at,
            )
            for s in store_repository.recent_stores(db, RECENT_LIMIT)
        ],
        ratings=[
            RecentRating(
                id=r.id,
                rating=r.rating,
                user_name=r.user.name if r.user else None,
                store_name=r.store.name if r.store else None,
                created_at=r.created_at,
            )
            for r in rating_repository.recent_ratings(db, RECENT_LIMIT)
        ],
    )
    return DashboardResponse(stats=stats, recent_activity=activity, top_rated_stores=top_rated_stores(db))
