"""
stajyer_takip/core/errors.py
Hata kodları, servis hatası ve erişim katmanının tekdüze sonuç tipi.

Erişim fonksiyonları (accounts / activities) hata fırlatmak yerine `Result` döndürür;
router'lar `code` alanına bakarak uygun HTTP durumunu seçer.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    BACKEND_ERROR = "BACKEND_ERROR"


class ServiceError(Exception):
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ProfileNotFoundError(ServiceError):
    def __init__(self, user_id: str):
        super().__init__(ErrorCode.NOT_FOUND, "Profil bulunamadı")
        self.user_id = user_id


class Result(BaseModel):
    success: bool
    data: Any = None
    error: Optional[str] = None
    code: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, data: Any = None) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: ErrorCode = ErrorCode.BACKEND_ERROR) -> "Result":
        return cls(success=False, error=error, code=code)

    @classmethod
    def from_exception(cls, exc: Exception, fallback: str) -> "Result":
        """ServiceError ise kendi kod/mesajını, değilse istisna metnini (yoksa fallback) taşır."""
        if isinstance(exc, ServiceError):
            return cls.fail(exc.message or fallback, exc.code)
        return cls.fail(str(exc) or fallback, ErrorCode.BACKEND_ERROR)


# Router tarafında kod → HTTP durum eşlemesi
HTTP_STATUS_BY_CODE = {
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.EMAIL_EXISTS: 409,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.BACKEND_ERROR: 502,
}
