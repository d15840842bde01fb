from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Operation, current_identity, requires
from store_rating.auth.utils import Identity
from store_rating.db.session import get_db
from store_rating.model.store_schema import StoreCreate, StoreEnvelope, StoreWithRating
from store_rating.repository.store import StoreFilter
from store_rating.service import store as store_service

router = APIRouter(prefix="/api/stores", tags=["Store"])


@router.get("/", response_model=List[StoreWithRating])
def list_stores(
    request: Request,
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    sort_by: str = Query("name"),
    sort_order: str = Query("asc"),
    db: Session = Depends(get_db),
):
    filters = StoreFilter(name=name, email=email, address=address)
    return store_service.list_stores(
        db, filters, sort_by=sort_by, sort_order=sort_order, viewer=current_identity(request)
    )


@router.get("/mine", response_model=List[StoreWithRating])
def list_my_stores(
    identity: Identity = Depends(requires(Operation.VIEW_OWN_STORES)),
    db: Session = Depends(get_db),
):
    return store_service.list_owned_stores(db, identity)


@router.post(
    "/",
    response_model=StoreEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(requires(Operation.CREATE_STORE))],
)
def create_store(data: StoreCreate, db: Session = Depends(get_db)):
    store = store_service.create_store(db, data)
    return StoreEnvelope(message="Store created successfully", store=store_service.to_store_response(store))
