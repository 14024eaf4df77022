# stajyer_takip/core/responses.py
from fastapi import HTTPException, Response

from stajyer_takip.core.errors import HTTP_STATUS_BY_CODE, ErrorCode, Result


def unwrap(result: Result, fallback: str = "Bir hata oluştu"):
    """Başarılıysa `data` döner; değilse koda göre HTTPException fırlatır."""
    if result.success:
        return result.data
    code = result.code or ErrorCode.BACKEND_ERROR
    raise HTTPException(status_code=HTTP_STATUS_BY_CODE[code], detail=result.error or fallback)


def set_session_cookie(response: Response, settings, value: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings) -> None:
    response.delete_cookie(key=settings.session_cookie_name, path="/")
