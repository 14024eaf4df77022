# stajyer_takip/core/auth.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.errors import ProfileNotFoundError
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.services import accounts

LOGIN_URL = "/login"


def extract_session_cookie(request: Request, cookie_name: str) -> Optional[str]:
    """
    Oturum çerezini alır. Yoksa None döner.
    Kenar filtresi ve bağımlılıklar aynı çerezi okur (tek taşıyıcı).
    """
    value = request.cookies.get(cookie_name)
    return value or None


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"Location": LOGIN_URL},
    )


def _resolve_principal(request: Request, backend: Backend) -> Optional[Principal]:
    """
    Çerezi doğrular, profili okur ve Principal'ı `request.state` üzerinde saklar.
    Aynı istekte ikinci çağrı Firestore'a gitmez.
    """
    cached = getattr(request.state, "principal", None)
    if cached is not None:
        return cached

    cookie = extract_session_cookie(request, backend.settings.session_cookie_name)
    if not cookie:
        return None
    user = accounts.get_current_user(backend, cookie)
    if not user.success:
        raise _unauthenticated(user.error or "Oturum bulunamadı")

    uid = user.data["uid"]
    try:
        profile = accounts.get_user_profile(backend, uid)
    except ProfileNotFoundError:
        raise _unauthenticated("Profil bulunamadı")

    principal = Principal(
        uid=uid,
        role=profile.get("role") or "stajyer",
        profile_id=profile["id"],
        name=profile.get("name") or user.data.get("name") or "",
        email=profile.get("email") or user.data.get("email"),
    )
    request.state.principal = principal
    request.state.profile = profile
    return principal


# --------- FastAPI Dependencies --------- #

def get_optional_principal(
    request: Request,
    backend: Backend = Depends(get_backend),
) -> Optional[Principal]:
    """
    Çerez opsiyonel: varsa doğrular ve Principal döner; yoksa None.
    Geçersiz çerez de None sayılır (ana sayfa yönlendirmesi için).
    """
    try:
        return _resolve_principal(request, backend)
    except HTTPException:
        return None


def get_principal(
    request: Request,
    backend: Backend = Depends(get_backend),
) -> Principal:
    """Çerez zorunlu: doğrular ve Principal döner (stajyer/yönetici)."""
    principal = _resolve_principal(request, backend)
    if principal is None:
        raise _unauthenticated("Oturum bulunamadı")
    return principal
