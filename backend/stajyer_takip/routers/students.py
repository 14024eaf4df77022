"""
# `stajyer_takip/routers/students.py` — Stajyer Listesi ve Detayı (yönetici)

### `GET /students`
Tüm stajyerler; her biri için aktivite sayısı ve kayıt tarihi (`d MMM yyyy`).

### `GET /students/{user_id}`
Stajyer profili, aktiviteleri, stajyere özel kategori dağılımı ve son 7 günlük zaman çizelgesi.

### `PUT /students/{user_id}/activities/{activity_id}/comment`
Yönetici yorumu ekler / düzenler. Boş yorum mevcut yorumu temizler.
Aynı aktiviteye eşzamanlı yorumlarda son yazan kazanır.
"""
from typing import List

from fastapi import APIRouter, Depends, Form, HTTPException, Query

from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.errors import ProfileNotFoundError
from stajyer_takip.core.responses import unwrap
from stajyer_takip.core.security import require_manager
from stajyer_takip.schemas.activity import ActivityMutationOut, ActivityOut, TimelineOut
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.schemas.stats import StudentDetailOut
from stajyer_takip.schemas.user import StudentSummary, UserProfile
from stajyer_takip.services import accounts, activity_views, stats
from stajyer_takip.services import activities as svc
from stajyer_takip.utils.dates import format_long, format_short, today_in

router = APIRouter(prefix="/students", tags=["Manager: Students"], dependencies=[Depends(require_manager)])

DETAIL_TIMELINE_DAYS = 7


def _initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()[:2]


@router.get("", response_model=List[StudentSummary], summary="Tüm stajyerler")
def list_students(backend: Backend = Depends(get_backend)):
    interns = unwrap(accounts.list_all_interns(backend), "Stajyerler yüklenirken bir hata oluştu")
    tz_name = backend.settings.timezone
    out = []
    for p in interns["documents"]:
        counted = svc.count_by_user(backend, p["userId"])
        name = p.get("name") or ""
        out.append(StudentSummary(
            id=p["id"],
            userId=p["userId"],
            name=name,
            email=p.get("email") or "",
            initials=_initials(name),
            activityCount=counted.data if counted.success else 0,
            registeredAt=format_short(p.get("createdAt"), tz_name) or None,
        ))
    return out


@router.get("/{user_id}", response_model=StudentDetailOut, summary="Stajyer detayı")
def get_student(
    user_id: str,
    limit: int = Query(100, ge=1, le=500),
    principal: Principal = Depends(require_manager),
    backend: Backend = Depends(get_backend),
):
    try:
        profile = accounts.get_user_profile(backend, user_id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message)

    data = unwrap(svc.get_activity_by_user(backend, user_id, limit), "Stajyer bilgileri yüklenirken bir hata oluştu")
    documents = data["documents"]
    tz_name = backend.settings.timezone
    timeline = stats.build_timeline(documents, DETAIL_TIMELINE_DAYS, today_in(tz_name), tz_name)
    return StudentDetailOut(
        profile=UserProfile(**profile),
        registeredAt=format_long(profile.get("createdAt"), tz_name) or None,
        activities=activity_views.build_rows(backend, documents, principal.uid),
        categoryDistribution=stats.category_distribution(documents),
        timeline=TimelineOut(**timeline),
    )


@router.put(
    "/{user_id}/activities/{activity_id}/comment",
    response_model=ActivityMutationOut,
    summary="Aktiviteye yönetici yorumu",
)
def comment_on_activity(
    user_id: str,
    activity_id: str,
    comment: str = Form(""),
    backend: Backend = Depends(get_backend),
):
    activity = unwrap(svc.get_activity(backend, activity_id), "Yorum kaydedilemedi")
    if user_id != activity.get("userId") and user_id not in (activity.get("participantIds") or []):
        raise HTTPException(status_code=404, detail="Aktivite bulunamadı")

    updated = unwrap(svc.set_manager_comment(backend, activity_id, comment), "Yorum kaydedilemedi")
    return ActivityMutationOut(message="Yorum kaydedildi", activity=ActivityOut(**updated))
