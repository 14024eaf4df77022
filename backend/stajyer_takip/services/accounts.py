"""
stajyer_takip/services/accounts.py
Kimlik + profil erişim katmanı.

`get_user_profile` dışındaki tüm fonksiyonlar hata fırlatmaz; `Result` döndürür.
Oturum, Firebase session cookie'si olarak taşınır.
"""
import logging
from typing import Any, Dict, Iterable, List

from stajyer_takip.core.errors import ErrorCode, ProfileNotFoundError, Result, ServiceError
from stajyer_takip.repositories import users as users_repo
from stajyer_takip.schemas.principal import ROLE_INTERN

logger = logging.getLogger("stajyer.accounts")


def _drop_sessions(backend, uid: str) -> None:
    """Kimliğe ait tüm oturumları düşürür. Silinemeyen oturum girişi engellemez."""
    try:
        backend.auth.revoke_refresh_tokens(uid)
    except Exception as exc:
        logger.warning("Session revoke failed for %s: %s", uid, exc)


async def _open_session(backend, email: str, password: str) -> Dict[str, Any]:
    data = await backend.identity.sign_in_with_password(email, password)
    expires_in = backend.settings.session_ttl_seconds
    cookie = backend.auth.create_session_cookie(data["idToken"], expires_in)
    return {"session_cookie": cookie, "user_id": data["localId"], "expires_in": expires_in}


async def login(backend, email: str, password: str) -> Result:
    """
    Önce şifre doğrulanır; yalnızca doğru kimlik bilgisiyle mevcut oturumlar düşürülür.
    Çerez, iptalden sonra alınan yeni ID token'dan üretilir.
    """
    try:
        verified = await backend.identity.sign_in_with_password(email, password)
        _drop_sessions(backend, verified["localId"])
        session = await _open_session(backend, email, password)
        return Result.ok(session)
    except Exception as exc:
        logger.error("Login error: %s", exc)
        return Result.from_exception(exc, "Giriş başarısız")


async def register(backend, email: str, password: str, name: str) -> Result:
    try:
        user = backend.auth.create_user(email=email, password=password, display_name=name)
        session = await _open_session(backend, email, password)
        profile = users_repo.create(
            backend, user_id=user.uid, name=name, email=email, role=ROLE_INTERN
        )
        return Result.ok({
            "user": {"uid": user.uid, "email": email, "name": name},
            "profile": profile,
            **session,
        })
    except Exception as exc:
        logger.error("Register error: %s", exc)
        return Result.from_exception(exc, "Kayıt başarısız")


def logout(backend, session_cookie: str) -> Result:
    try:
        claims = backend.auth.verify_session_cookie(session_cookie)
        backend.auth.revoke_refresh_tokens(claims["uid"])
        return Result.ok()
    except Exception as exc:
        logger.error("Logout error: %s", exc)
        return Result.from_exception(exc, "Çıkış başarısız")


def get_current_user(backend, session_cookie: str) -> Result:
    if not session_cookie:
        return Result.fail("Kullanıcı bulunamadı", ErrorCode.UNAUTHENTICATED)
    try:
        claims = backend.auth.verify_session_cookie(session_cookie)
        uid = claims.get("uid") or claims.get("user_id")
        if not uid:
            return Result.fail("Kullanıcı bulunamadı", ErrorCode.UNAUTHENTICATED)
        return Result.ok({
            "uid": uid,
            "email": claims.get("email"),
            "name": claims.get("name"),
        })
    except Exception as exc:
        # Geçersiz çerez her istekte olabilir; error yerine debug
        logger.debug("Current user lookup failed: %s", exc)
        if isinstance(exc, ServiceError):
            return Result.fail(exc.message, ErrorCode.UNAUTHENTICATED)
        return Result.fail(str(exc) or "Kullanıcı bulunamadı", ErrorCode.UNAUTHENTICATED)


def get_user_profile(backend, user_id: str) -> Dict[str, Any]:
    """Profil yoksa `ProfileNotFoundError` fırlatır."""
    try:
        profile = users_repo.find_by_user_id(backend, user_id)
    except Exception as exc:
        logger.error("Get user profile error: %s", exc)
        raise
    if profile is None:
        raise ProfileNotFoundError(user_id)
    return profile


def get_user_profiles_by_ids(backend, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """{userId: profile}. Hata durumunda boş sözlük; isimler gösterim içindir."""
    try:
        return users_repo.find_by_user_ids(backend, user_ids)
    except Exception as exc:
        logger.error("Get user profiles error: %s", exc)
        return {}


def list_all_interns(backend) -> Result:
    try:
        interns: List[Dict[str, Any]] = users_repo.list_by_role(backend, ROLE_INTERN)
        interns.sort(key=lambda p: (p.get("name") or "").lower())
        return Result.ok({"documents": interns, "total": len(interns)})
    except Exception as exc:
        logger.error("List all interns error: %s", exc)
        return Result.from_exception(exc, "Stajyerler getirilemedi")


def update_user_profile(backend, profile_id: str, name: str) -> Result:
    try:
        profile = users_repo.update(backend, profile_id, {"name": name})
        return Result.ok(profile)
    except Exception as exc:
        logger.error("Update user profile error: %s", exc)
        return Result.from_exception(exc, "Profil güncellenemedi")


async def update_password(backend, uid: str, email: str, old_password: str, new_password: str) -> Result:
    try:
        # Eski şifre doğrulaması: Admin SDK şifre kontrol edemez, girişle doğrularız
        await backend.identity.sign_in_with_password(email, old_password)
        backend.auth.update_user(uid, password=new_password)
        # Şifre değişimi mevcut oturumları geçersiz kılar; yenisini aç
        session = await _open_session(backend, email, new_password)
        return Result.ok(session)
    except Exception as exc:
        logger.error("Update password error: %s", exc)
        if isinstance(exc, ServiceError) and exc.code == ErrorCode.INVALID_CREDENTIALS:
            return Result.fail("Mevcut şifre hatalı", ErrorCode.INVALID_CREDENTIALS)
        return Result.from_exception(exc, "Şifre güncellenemedi")
