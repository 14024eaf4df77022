"""
# `stajyer_takip/routers/activities.py` — Aktivite Uçları

| Uç | Açıklama |
|----|----------|
| `GET /activities` | Oturumdaki kullanıcının aktiviteleri (tarih azalan) |
| `GET /activities/new` | Yeni aktivite formu: önerilen kategoriler + stajyerler |
| `POST /activities` | Aktivite oluştur (Form-Data) |
| `GET /activities/{id}` | Tek aktivite (sahibi veya yönetici) |
| `PUT /activities/{id}` | Düzenle (yalnızca sahibi; `userId`/`userName` korunur) |
| `DELETE /activities/{id}` | Sil (yalnızca sahibi) |

Satırlardaki `canEdit` alanı düzenle/sil kontrollerinin gösterilip gösterilmeyeceğini belirler.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query, status

from stajyer_takip.core.auth import get_principal
from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.responses import unwrap
from stajyer_takip.core.security import require_owner
from stajyer_takip.schemas.activity import (
    ActivityFormOptions,
    ActivityList,
    ActivityMutationOut,
    ActivityOut,
    InternOption,
)
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.services import accounts, activity_views
from stajyer_takip.services import activities as svc
from stajyer_takip.utils import validators
from stajyer_takip.utils.categories import SUGGESTED_CATEGORIES

router = APIRouter(prefix="/activities", tags=["Activities"])


def _load_owned(backend: Backend, activity_id: str, principal: Principal) -> dict:
    activity = unwrap(svc.get_activity(backend, activity_id), "Aktivite yüklenemedi")
    require_owner(activity, principal)
    return activity


@router.get("", response_model=ActivityList, summary="Aktivitelerim (yeni→eski)")
def list_my_activities(
    limit: int = Query(100, ge=1, le=500),
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    data = unwrap(svc.get_activity_by_user(backend, principal.uid, limit), "Aktiviteler getirilemedi")
    rows = activity_views.build_rows(backend, data["documents"], principal.uid)
    return ActivityList(items=rows, total=data["total"])


@router.get("/new", response_model=ActivityFormOptions, summary="Yeni aktivite formu seçenekleri")
def new_activity_form(
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    result = accounts.list_all_interns(backend)
    interns = result.data["documents"] if result.success else []
    return ActivityFormOptions(
        categories=SUGGESTED_CATEGORIES,
        interns=[
            InternOption(userId=p["userId"], name=p.get("name") or "")
            for p in interns
            if p.get("userId") != principal.uid
        ],
    )


@router.post(
    "",
    response_model=ActivityMutationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Aktivite ekle",
)
def create_activity(
    category: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    participantIds: Optional[List[str]] = Form(None),
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    category = validators.validate_category(category)
    description = validators.validate_description(description)
    when = validators.validate_date(date)

    activity = unwrap(
        svc.create_activity(backend, {
            "userId": principal.uid,
            "userName": principal.name,
            "category": category,
            "description": description,
            "date": when.isoformat(),
            "participantIds": participantIds or [],
        }),
        "Aktivite eklenemedi",
    )
    return ActivityMutationOut(message="Aktivite başarıyla eklendi!", activity=ActivityOut(**activity))


@router.get("/{activity_id}", response_model=ActivityOut, summary="Aktivite detayı")
def get_activity(
    activity_id: str,
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    activity = unwrap(svc.get_activity(backend, activity_id), "Aktivite yüklenemedi")
    if not principal.is_manager:
        require_owner(activity, principal)
    return ActivityOut(**activity)


@router.put("/{activity_id}", response_model=ActivityMutationOut, summary="Aktivite düzenle")
def update_activity(
    activity_id: str,
    category: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    participantIds: Optional[List[str]] = Form(None),
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    validators.require_all(category, description, date)
    when = validators.validate_date(date)
    _load_owned(backend, activity_id, principal)

    activity = unwrap(
        svc.update_activity(backend, activity_id, {
            "category": category.strip(),
            "description": description.strip(),
            "date": when.isoformat(),
            "participantIds": participantIds or [],
        }),
        "Aktivite güncellenemedi",
    )
    return ActivityMutationOut(message="Aktivite güncellendi", activity=ActivityOut(**activity))


@router.delete("/{activity_id}", response_model=ActivityMutationOut, summary="Aktivite sil")
def delete_activity(
    activity_id: str,
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    _load_owned(backend, activity_id, principal)
    unwrap(svc.delete_activity(backend, activity_id), "Aktivite silinemedi")
    return ActivityMutationOut(message="Aktivite silindi")
