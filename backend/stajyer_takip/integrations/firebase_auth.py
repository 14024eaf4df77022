# stajyer_takip/integrations/firebase_auth.py
"""
Firebase Admin Auth için ince adaptör.

Tüm çağrılar belirli bir `firebase_admin.App` örneğine bağlanır; Firebase'e özgü
istisnalar `ServiceError`'a çevrilir.
"""
from typing import Any, Dict

from firebase_admin import auth as firebase_auth

from stajyer_takip.core.errors import ErrorCode, ServiceError


class FirebaseAuthAdmin:
    def __init__(self, app):
        self.app = app

    def create_user(self, *, email: str, password: str, display_name: str):
        try:
            return firebase_auth.create_user(
                email=email, password=password, display_name=display_name, app=self.app
            )
        except firebase_auth.EmailAlreadyExistsError:
            raise ServiceError(ErrorCode.EMAIL_EXISTS, "Bu e-posta adresi zaten kayıtlı")

    def get_user(self, uid: str):
        try:
            return firebase_auth.get_user(uid, app=self.app)
        except firebase_auth.UserNotFoundError:
            raise ServiceError(ErrorCode.NOT_FOUND, "Kullanıcı bulunamadı")

    def get_user_by_email(self, email: str):
        try:
            return firebase_auth.get_user_by_email(email, app=self.app)
        except firebase_auth.UserNotFoundError:
            raise ServiceError(ErrorCode.NOT_FOUND, "Kullanıcı bulunamadı")

    def update_user(self, uid: str, **kwargs):
        return firebase_auth.update_user(uid, app=self.app, **kwargs)

    def revoke_refresh_tokens(self, uid: str) -> None:
        firebase_auth.revoke_refresh_tokens(uid, app=self.app)

    def create_session_cookie(self, id_token: str, expires_in: int) -> str:
        cookie = firebase_auth.create_session_cookie(id_token, expires_in=expires_in, app=self.app)
        return cookie.decode() if isinstance(cookie, bytes) else cookie

    def verify_session_cookie(self, session_cookie: str) -> Dict[str, Any]:
        # check_revoked=True -> logout / yeni login sonrası eski çerezler reddedilir
        try:
            return firebase_auth.verify_session_cookie(session_cookie, check_revoked=True, app=self.app)
        except firebase_auth.RevokedSessionCookieError:
            raise ServiceError(ErrorCode.UNAUTHENTICATED, "Oturum sonlandırılmış")
        except firebase_auth.ExpiredSessionCookieError:
            raise ServiceError(ErrorCode.UNAUTHENTICATED, "Oturum süresi dolmuş")
        except (firebase_auth.InvalidSessionCookieError, ValueError):
            raise ServiceError(ErrorCode.UNAUTHENTICATED, "Geçersiz oturum")
