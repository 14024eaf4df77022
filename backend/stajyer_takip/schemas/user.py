"""
# `stajyer_takip/schemas/user.py` — Kullanıcı Şema Dokümantasyonu

## Genel Bilgi
Kullanıcı profili, oturum ve ayar işlemleri için kullanılan Pydantic veri modelleri.
Firestore `users` dokümanları camelCase alan adlarıyla saklanır (`userId`, `createdAt`);
modeller aynı adları kullanır.

---

## `UserProfile`
| Alan      | Tip       | Açıklama |
|-----------|-----------|----------|
| id        | `str`     | Firestore doküman id'si |
| userId    | `str`     | Firebase UID |
| name      | `str`     | Ad Soyad |
| email     | `str`     | E-posta |
| role      | `stajyer` / `yonetici` | Rol (uygulama tarafından değiştirilmez) |
| createdAt | `datetime` / `null` | Kayıt zamanı (Firestore atar) |

---

## Oturum Şemaları
- `LoginResponse`: `user_id`, `expires_in` (saniye). Session cookie yanıtta `Set-Cookie` ile gelir.
- `RegisterResponse`: `user_id`, `profile`, `expires_in`.
- `MeResponse`: profil + role göre kenar menüsü (`menu`).

"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stajyer_takip.schemas.principal import Role


class UserProfile(BaseModel):
    """Schema for user profile output."""
    id: str = Field(..., description="Firestore document ID")
    userId: str = Field(..., description="User unique ID (UID from Firebase)")
    name: str = Field("", description="Full name of the user")
    email: str = Field("", description="Email address of the user")
    role: Role = Field("stajyer", description="Role of the user (stajyer, yonetici)")
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class LoginResponse(BaseModel):
    """Başarılı girişte dönen bilgi (çerez ayrıca set edilir)."""
    message: str = "Giriş başarılı!"
    user_id: str
    expires_in: int  # saniye


class RegisterResponse(BaseModel):
    message: str = "Kayıt başarılı! Yönlendiriliyorsunuz..."
    user_id: str
    profile: UserProfile
    expires_in: int


class MenuItem(BaseModel):
    title: str
    url: str


class MeResponse(BaseModel):
    profile: UserProfile
    menu: List[MenuItem]


class StudentSummary(BaseModel):
    """Stajyer listesi satırı."""
    id: str
    userId: str
    name: str
    email: str
    initials: str
    activityCount: int = 0
    registeredAt: Optional[str] = Field(None, description="'d MMM yyyy' biçiminde kayıt tarihi")


class MessageOut(BaseModel):
    message: str
