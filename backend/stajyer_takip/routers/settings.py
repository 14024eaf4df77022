# stajyer_takip/routers/settings.py — profil adı ve şifre ayarları
from typing import Optional

from fastapi import APIRouter, Depends, Form, Response

from stajyer_takip.core.auth import get_principal
from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.responses import set_session_cookie, unwrap
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.schemas.user import MessageOut, UserProfile
from stajyer_takip.services import accounts
from stajyer_takip.utils import validators

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.put("/profile", response_model=UserProfile, summary="Ad Soyad güncelle")
def update_profile(
    name: str = Form(""),
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    name = validators.validate_name(name)
    profile = unwrap(accounts.update_user_profile(backend, principal.profile_id, name), "Profil güncellenemedi")
    return UserProfile(**profile)


@router.put("/password", response_model=MessageOut, summary="Şifre değiştir")
async def update_password(
    response: Response,
    old_password: str = Form(""),
    new_password: str = Form(""),
    new_password_confirm: Optional[str] = Form(None),
    principal: Principal = Depends(get_principal),
    backend: Backend = Depends(get_backend),
):
    if not old_password:
        raise validators.invalid("Mevcut şifrenizi giriniz")
    new_password = validators.validate_password(new_password)
    validators.validate_confirmation(new_password, new_password_confirm)

    session = unwrap(
        await accounts.update_password(backend, principal.uid, principal.email or "", old_password, new_password),
        "Şifre güncellenemedi",
    )
    set_session_cookie(response, backend.settings, session["session_cookie"], session["expires_in"])
    return MessageOut(message="Şifre güncellendi")
