# admin_panel/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from .auth import require_admin
from .database import get_session_maker
from .schemas import DashboardStats
from .stats import compute_dashboard_stats

router = APIRouter(prefix="/api/admin", tags=["dashboard"], dependencies=[Depends(require_admin)])


# 📊 Сводка для панели
@router.get("/dashboard", response_model=DashboardStats)
async def dashboard_stats(session_maker: sessionmaker = Depends(get_session_maker)):
    return await compute_dashboard_stats(session_maker)
