import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store_rating.auth import validators
from store_rating.auth.permissions import Role
from store_rating.auth.utils import Identity, hash_password, issue_token, verify_password
from store_rating.core.errors import Conflict, NotFound, Unauthorized, ValidationError
from store_rating.model.user import User
from store_rating.model.user_schema import (
    ProfileUpdate,
    UserCreate,
    UserListItem,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from store_rating.repository import store as store_repository
from store_rating.repository import user as user_repository
from store_rating.repository.user import USER_SORT_FIELDS, UserChanges, UserFilter
from store_rating.service.query import parse_sort
from store_rating.service.rating import aggregate

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "User with this email already exists"


def check_name(name: str):
    if not validators.validate_name(name):
        raise ValidationError(validators.NAME_MESSAGE, field="name")


def check_email(email: str):
    if not validators.validate_email(email):
        raise ValidationError(validators.EMAIL_MESSAGE, field="email")


def check_password(password: str):
    if not validators.validate_password(password):
        raise ValidationError(validators.PASSWORD_MESSAGE, field="password")


def check_address(address: str):
    if not validators.validate_address(address):
        raise ValidationError(validators.ADDRESS_MESSAGE, field="address")


def _create_account(db: Session, data: UserRegister, role: Role) -> User:
    if not (data.name and data.email and data.password and data.address):
        raise ValidationError("All fields are required")
    check_name(data.name)
    check_email(data.email)
    check_password(data.password)
    check_address(data.address)

    if user_repository.get_user(db, email=data.email):
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    try:
        user = user_repository.create_user(
            db,
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            address=data.address,
            role=role,
        )
    except IntegrityError:
        db.rollback()
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    logger.info("User created: id=%s role=%s", user.id, role.value)
    return user


def register_user(db: Session, data: UserRegister) -> User:
    """Self-registration always yields a normal user."""
    return _create_account(db, data, Role.NORMAL_USER)


def create_user(db: Session, data: UserCreate) -> User:
    return _create_account(db, data, data.role)


def authenticate(db: Session, email: str, password: str) -> User:
    if not email or not password:
        raise ValidationError("Email and password are required")
    user = user_repository.get_user(db, email=email)
    if not user or not verify_password(password, user.password):
        logger.warning("Failed login for %s", email)
        raise Unauthorized("Invalid credentials")
    return user


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = authenticate(db, email, password)
    token = issue_token(Identity(subject_id=user.id, email=user.email, role=user.role))
    logger.info("User logged in: id=%s", user.id)
    return user, token


def get_profile(db: Session, identity: Identity) -> User:
    user = user_repository.get_user(db, id=identity.subject_id)
    if not user:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, identity: Identity, data: ProfileUpdate) -> User:
    if data.name is None and data.address is None and data.new_password is None:
        raise ValidationError("No changes provided")

    user = get_profile(db, identity)
    changes = UserChanges()

    if data.name is not None:
        check_name(data.name)
        changes.name = data.name
    if data.address is not None:
        check_address(data.address)
        changes.address = data.address
    if data.new_password is not None:
        if not data.current_password:
            raise ValidationError("Current password is required to change password", field="current_password")
        if not verify_password(data.current_password, user.password):
            raise ValidationError("Current password is incorrect", field="current_password")
        check_password(data.new_password)
        changes.password = hash_password(data.new_password)

    return user_repository.update_user(db, user, changes)


def update_user(db: Session, user_id: str, data: UserUpdate) -> User:
    changes = UserChanges(name=data.name, email=data.email, address=data.address, role=data.role)
    if changes.is_empty():
        raise ValidationError("No changes provided")

    user = user_repository.get_user(db, id=user_id)
    if not user:
        raise NotFound("User not found")

    if changes.name is not None:
        check_name(changes.name)
    if changes.address is not None:
        check_address(changes.address)
    if changes.email is not None:
        check_email(changes.email)
        other = user_repository.get_user(db, email=changes.email)
        if other and other.id != user.id:
            raise Conflict(EMAIL_TAKEN_MESSAGE)

    try:
        updated = user_repository.update_user(db, user, changes)
    except IntegrityError:
        db.rollback()
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    logger.info("User updated by admin: id=%s", updated.id)
    return updated


def list_users(
    db: Session,
    filters: UserFilter,
    sort_by: str = "name",
    sort_order: str = "asc",
) -> List[UserListItem]:
    """Users matching the filter; store owners carry their overall average."""
    field, descending = parse_sort(sort_by, sort_order, USER_SORT_FIELDS)
    users = user_repository.list_users(db, filters, sort_by=field, descending=descending)

    owner_ids = [u.id for u in users if u.role == Role.STORE_OWNER]
    scores = store_repository.get_scores_by_owner(db, owner_ids) if owner_ids else {}

    items = []
    for user in users:
        average: Optional[float] = None
        if user.role == Role.STORE_OWNER:
            average = aggregate(scores.get(user.id, [])).average
        item = UserResponse.model_validate(user).model_dump()
        items.append(UserListItem(**item, average_rating=average))
    return items
