from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Operation, requires
from store_rating.db.session import get_db
from store_rating.model.dashboard_schema import DashboardResponse
from store_rating.service import dashboard as dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/", response_model=DashboardResponse, dependencies=[Depends(requires(Operation.VIEW_DASHBOARD))])
def get_dashboard(db: Session = Depends(get_db)):
    """Totals, recent activity and the top rated stores."""
    return dashboard_service.get_dashboard(db)
