from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Operation, Role, requires
from store_rating.db.session import get_db
from store_rating.model.user_schema import UserCreate, UserEnvelope, UserListItem, UserResponse, UserUpdate
from store_rating.repository.user import UserFilter
from store_rating.service import user as user_service

router = APIRouter(prefix="/api/users", tags=["User"])


@router.get("/", response_model=List[UserListItem], dependencies=[Depends(requires(Operation.LIST_USERS))])
def list_users(
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    role: Optional[Role] = Query(None),
    sort_by: str = Query("name"),
    sort_order: str = Query("asc"),
    db: Session = Depends(get_db),
):
    filters = UserFilter(name=name, email=email, address=address, role=role)
    return user_service.list_users(db, filters, sort_by=sort_by, sort_order=sort_order)


@router.post(
    "/",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(requires(Operation.CREATE_USER))],
)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    user = user_service.create_user(db, data)
    return UserEnvelope(message="User created successfully", user=UserResponse.model_validate(user))


@router.patch("/{id}", response_model=UserEnvelope, dependencies=[Depends(requires(Operation.UPDATE_USER))])
def update_user(id: str, data: UserUpdate, db: Session = Depends(get_db)):
    user = user_service.update_user(db, id, data)
    return UserEnvelope(message="User updated successfully", user=UserResponse.model_validate(user))
