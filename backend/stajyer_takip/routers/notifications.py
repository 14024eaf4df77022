"""
Notifications router: yönetici yorumu almış aktiviteler
"""
from fastapi import APIRouter, Depends

from stajyer_takip.core.auth import get_principal
from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.responses import unwrap
from stajyer_takip.schemas.activity import ActivityList
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.services import activity_views
from stajyer_takip.services import activities as svc

router = APIRouter(prefix="/notifications", tags=["Notifications"])

MANAGER_SCAN_LIMIT = 100


@router.get("", response_model=ActivityList, summary="Yorumlu aktiviteler")
def get_notifications(
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    """
    Yönetici: tüm aktivitelerin son 100'ü içinden yorumlu olanlar.
    Stajyer: kendi aktivitelerinden yorumlu olanlar.
    """
    if principal.is_manager:
        result = svc.list_all_activities(backend, MANAGER_SCAN_LIMIT)
    else:
        result = svc.get_activity_by_user(backend, principal.uid)
    data = unwrap(result, "Bildirimler yüklenemedi")

    commented = activity_views.with_comment(data["documents"])
    rows = activity_views.build_rows(backend, commented, principal.uid)
    return ActivityList(items=rows, total=len(rows))
