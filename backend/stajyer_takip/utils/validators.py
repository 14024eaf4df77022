"""
Form doğrulamaları. Ağ çağrısından önce çalışır; hata mesajı doğrudan
kullanıcıya gösterilir ve loglanmaz.
"""
from datetime import date
from typing import Optional

from fastapi import HTTPException, status

from stajyer_takip.utils.dates import to_date

MIN_PASSWORD = 8
MIN_NAME = 2
MIN_DESCRIPTION = 10


def invalid(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def validate_email(email: Optional[str]) -> str:
    email = (email or "").strip()
    if not email or "@" not in email:
        raise invalid("Geçerli bir e-posta adresi giriniz")
    return email


def validate_password(password: Optional[str]) -> str:
    if not password or len(password) < MIN_PASSWORD:
        raise invalid(f"Şifre en az {MIN_PASSWORD} karakter olmalıdır")
    return password


def validate_confirmation(password: str, confirmation: Optional[str]) -> None:
    if confirmation is not None and password != confirmation:
        raise invalid("Şifreler eşleşmiyor")


def validate_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if len(name) < MIN_NAME:
        raise invalid(f"İsim en az {MIN_NAME} karakter olmalıdır")
    return name


def validate_category(category: Optional[str]) -> str:
    category = (category or "").strip()
    if not category:
        raise invalid("Kategori seçiniz")
    return category


def validate_description(description: Optional[str]) -> str:
    description = (description or "").strip()
    if len(description) < MIN_DESCRIPTION:
        raise invalid(f"Açıklama en az {MIN_DESCRIPTION} karakter olmalıdır")
    return description


def validate_date(value: Optional[str]) -> date:
    parsed = to_date(value)
    if parsed is None:
        raise invalid("Geçerli bir tarih giriniz")
    return parsed


def require_all(*values) -> None:
    """Düzenleme formu: alanlardan biri boşsa tek genel mesaj."""
    if any(not (v or "").strip() for v in values):
        raise invalid("Lütfen tüm alanları doldurun")
