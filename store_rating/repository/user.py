from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from store_rating.auth.permissions import Role
from store_rating.model.user import User

USER_SORT_FIELDS = {
    "name": User.name,
    "email": User.email,
    "address": User.address,
    "role": User.role,
    "created_at": User.created_at,
}


@dataclass
class UserFilter:
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    role: Optional[Role] = None


@dataclass
class UserChanges:
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    role: Optional[Role] = None
    password: Optional[str] = None

    def is_empty(self) -> bool:
        return all(value is None for value in vars(self).values())


def create_user(db: Session, name: str, email: str, password_hash: str, address: str, role: Role) -> User:
    new_user = User(
        name=name,
        email=email,
        password=password_hash,
        address=address,
        role=role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


def get_user(db: Session, id: Optional[str] = None, email: Optional[str] = None) -> Optional[User]:
    query = db.query(User)
    if id:
        query = query.filter(User.id == id)
    if email:
        query = query.filter(User.email == email)
    return query.first()


def list_users(db: Session, filters: UserFilter, sort_by: str = "name", descending: bool = False) -> List[User]:
    query = db.query(User)
    if filters.name:
        query = query.filter(User.name.ilike(f"%{filters.name}%"))
    if filters.email:
        query = query.filter(User.email.ilike(f"%{filters.email}%"))
    if filters.address:
        query = query.filter(User.address.ilike(f"%{filters.address}%"))
    if filters.role:
        query = query.filter(User.role == filters.role)
    column = USER_SORT_FIELDS[sort_by]
    query = query.order_by(column.desc() if descending else column.asc(), User.id)
    return query.all()


def update_user(db: Session, user: User, changes: UserChanges) -> User:
    if changes.name is not None:
        user.name = changes.name
    if changes.email is not None:
        user.email = changes.email
    if changes.address is not None:
        user.address = changes.address
    if changes.role is not None:
        user.role = changes.role
    if changes.password is not None:
        user.password = changes.password
    db.commit()
    db.refresh(user)
    return user


def count_users(db: Session) -> int:
    return db.query(User).count()


def recent_users(db: Session, limit: int = 5) -> List[User]:
    return db.query(User).order_by(User.created_at.desc()).limit(limit).all()
