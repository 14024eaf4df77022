"""
Dashboard router: yönetici paneli istatistikleri
"""
from fastapi import APIRouter, Depends, Query

from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.security import require_manager
from stajyer_takip.schemas.activity import ActivityOut
from stajyer_takip.schemas.stats import DashboardOut, StatResult
from stajyer_takip.services import activities, stats

router = APIRouter(prefix="/dashboard", tags=["Manager: Dashboard"], dependencies=[Depends(require_manager)])

RECENT_LIMIT = 10


@router.get("", response_model=DashboardOut, summary="Panel istatistikleri + son aktiviteler")
def get_dashboard(
    days: int = Query(7, ge=1, le=90),
    backend: Backend = Depends(get_backend),
):
    recent = activities.list_all_activities(backend, RECENT_LIMIT)
    return DashboardOut(
        totalInterns=stats.get_total_interns(backend),
        todayActive=stats.get_today_active_interns(backend),
        totalActivities=stats.get_total_activities(backend),
        mostActiveIntern=stats.get_most_active_intern(backend),
        categoryDistribution=stats.get_category_distribution(backend),
        timeline=stats.get_activity_timeline(backend, days),
        recentActivities=[ActivityOut(**a) for a in recent.data["documents"]] if recent.success else [],
    )


@router.get("/timeline", response_model=StatResult, summary="Son N günün aktivite sayısı")
def get_timeline(
    days: int = Query(7, ge=1, le=90),
    backend: Backend = Depends(get_backend),
):
    return stats.get_activity_timeline(backend, days)
