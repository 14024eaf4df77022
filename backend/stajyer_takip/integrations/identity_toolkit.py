"""
stajyer_takip/integrations/identity_toolkit.py
Firebase Identity Toolkit REST istemcisi (e-posta + şifre ile giriş).

Admin SDK şifre doğrulayamaz; giriş için `accounts:signInWithPassword`
ucuna proxy oluruz ve dönen ID token'dan session cookie üretiriz.
"""
import logging
from typing import Any, Dict

import httpx

from stajyer_takip.core.errors import ErrorCode, ServiceError

logger = logging.getLogger("stajyer.identity")

# Firebase'in döndürdüğü hata kodları → kullanıcıya gösterilecek mesaj
_SIGNIN_MESSAGES = {
    "EMAIL_NOT_FOUND": "E-posta veya şifre hatalı",
    "INVALID_PASSWORD": "E-posta veya şifre hatalı",
    "INVALID_LOGIN_CREDENTIALS": "E-posta veya şifre hatalı",
    "USER_DISABLED": "Hesap devre dışı bırakılmış",
}


class IdentityToolkit:
    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0, transport=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """idToken, refreshToken, expiresIn, localId içeren sözlük döner."""
        if not self.api_key:
            raise ServiceError(ErrorCode.BACKEND_ERROR, "Sunucu yapılandırması eksik: FIREBASE_WEB_API_KEY")

        url = f"{self.base_url}/accounts:signInWithPassword?key={self.api_key}"
        payload = {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise ServiceError(ErrorCode.BACKEND_ERROR, f"Kimlik servisine ulaşılamadı: {exc}")

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code != 200:
            message = (data.get("error") or {}).get("message", "") or ""
            logger.warning("signInWithPassword failed: %s %s", resp.status_code, message)
            # "INVALID_PASSWORD : ..." biçimindeki ekleri kırp
            key = message.split(":")[0].strip()
            raise ServiceError(
                ErrorCode.INVALID_CREDENTIALS,
                _SIGNIN_MESSAGES.get(key, "Giriş başarısız"),
            )
        if "idToken" not in data:
            logger.warning("signInWithPassword returned an unreadable body: %s", resp.status_code)
            raise ServiceError(ErrorCode.BACKEND_ERROR, "Giriş başarısız")
        return data
