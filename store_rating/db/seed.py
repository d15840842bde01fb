"""Seed demo accounts, stores and ratings. Idempotent: existing rows are left alone."""

import logging

from sqlalchemy.orm import Session

from store_rating.auth.permissions import Role
from store_rating.auth.utils import hash_password
from store_rating.core.config import get_settings
from store_rating.core.log import setup_logging
from store_rating.db.session import get_session_factory, init_db
from store_rating.repository import rating as rating_repository
from store_rating.repository import store as store_repository
from store_rating.repository import user as user_repository

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "name": "System Administrator User Account",
        "email": "admin@ecomrating.com",
        "password": "AdminPass123!",
        "address": "123 Admin Street, Admin City, AC 12345",
        "role": Role.SYSTEM_ADMIN,
    },
    {
        "name": "Store Owner User Account Example",
        "email": "storeowner@ecomrating.com",
        "password": "StorePass123!",
        "address": "456 Store Street, Store City, SC 67890",
        "role": Role.STORE_OWNER,
    },
    {
        "name": "Normal User Account Example User",
        "email": "user@ecomrating.com",
        "password": "UserPass123!",
        "address": "789 User Street, User City, UC 11111",
        "role": Role.NORMAL_USER,
    },
]

DEMO_STORES = [
    {
        "name": "Sample Electronics Store",
        "email": "store1@example.com",
        "address": "100 Electronics Ave, Tech City, TC 22222",
        "owner_email": "storeowner@ecomrating.com",
    },
    {
        "name": "Sample Clothing Store",
        "email": "store2@example.com",
        "address": "200 Fashion Blvd, Style City, SC 33333",
        "owner_email": "storeowner@ecomrating.com",
    },
]

DEMO_RATINGS = [
    ("user@ecomrating.com", "store1@example.com", 4),
    ("user@ecomrating.com", "store2@example.com", 5),
]


def seed(db: Session):
    users = {}
    for u in DEMO_USERS:
        existing = user_repository.get_user(db, email=u["email"])
        if not existing:
            existing = user_repository.create_user(
                db,
                name=u["name"],
                email=u["email"],
                password_hash=hash_password(u["password"]),
                address=u["address"],
                role=u["role"],
            )
        users[u["email"]] = existing

    stores = {}
    for s in DEMO_STORES:
        existing = store_repository.get_store(db, email=s["email"])
        if not existing:
            existing = store_repository.create_store(
                db,
                name=s["name"],
                email=s["email"],
                address=s["address"],
                owner_id=users[s["owner_email"]].id,
            )
        stores[s["email"]] = existing

    for user_email, store_email, score in DEMO_RATINGS:
        user, store = users[user_email], stores[store_email]
        if not rating_repository.get_rating(db, user.id, store.id):
            rating_repository.insert_rating(db, user.id, store.id, score)

    logger.info("Database seeded: %d users, %d stores", len(users), len(stores))


def main():
    setup_logging(get_settings().LOG_LEVEL)
    init_db()
    db = get_session_factory()()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
