# backend/propertyhub/routers/dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import Principal, get_principal
from ..db import get_db
from ..schemas import DashboardStatsOut, PropertyOut
from ..services.dashboard_stats import compute_dashboard_stats
from ..services.listing_queries import list_properties_by_agent

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    """
    Top-of-dashboard cards for the caller:
      totalProperties, totalRevenue, occupancyRate, avgResponseTime
    """
    return DashboardStatsOut(**compute_dashboard_stats(db, user_id=p.user_id).to_dict())


@router.get("/properties", response_model=list[PropertyOut])
def my_properties(db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    return list_properties_by_agent(db, p.user_id)
