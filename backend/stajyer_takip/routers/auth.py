"""
# stajyer_takip/routers/auth.py — Kimlik Doğrulama Dokümantasyonu

## Genel Bilgi
Kayıt, giriş, çıkış ve oturumdaki kullanıcının profil/menü bilgisini yönetir.
Firebase Authentication kullanılır; oturum HTTP-only bir session cookie ile taşınır.

---

## Endpoint’ler

### POST /register
Parametreler (Form-Data): `name` (≥2), `email`, `password` (≥8), `password_confirm`.

İşleyiş:
1. Form doğrulanır (ağ çağrısı yapılmadan).
2. Firebase'de kullanıcı oluşturulur, giriş yapılır.
3. Firestore'da `stajyer` rolüyle profil yazılır.
4. Session cookie set edilir.

---

### POST /login
Parametreler (Form-Data): `email`, `password` (≥8).

İşleyiş:
1. Kimliğe ait mevcut tüm oturumlar düşürülür.
2. Firebase REST API ile giriş yapılır, session cookie üretilir.
3. Başarısızsa 401 döner.

---

### POST /logout
Oturumu sonlandırır ve çerezi siler.

---

### GET /me
Profil + role göre kenar menüsü.

"""
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, Response, status

from stajyer_takip.core.auth import extract_session_cookie, get_principal
from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.responses import clear_session_cookie, set_session_cookie, unwrap
from stajyer_takip.schemas.principal import Principal
from stajyer_takip.schemas.user import (
    LoginResponse,
    MeResponse,
    MenuItem,
    MessageOut,
    RegisterResponse,
    UserProfile,
)
from stajyer_takip.services import accounts
from stajyer_takip.utils import validators

router = APIRouter(tags=["Auth"])

STAJYER_MENU_ITEMS = [
    MenuItem(title="Aktivitelerim", url="/activities"),
    MenuItem(title="Bildirimler", url="/notifications"),
    MenuItem(title="Ayarlar", url="/settings"),
]

YONETICI_MENU_ITEMS = [
    MenuItem(title="Dashboard", url="/dashboard"),
    MenuItem(title="Tüm Stajyerler", url="/students"),
    MenuItem(title="Bildirimler", url="/notifications"),
    MenuItem(title="Ayarlar", url="/settings"),
]


@router.get("/login", summary="Giriş formu bilgisi")
def login_form(redirect: Optional[str] = None):
    return {
        "fields": {"email": "E-posta", "password": f"Şifre (min {validators.MIN_PASSWORD} karakter)"},
        "redirect": redirect or "/activities",
    }


@router.get("/register", summary="Kayıt formu bilgisi")
def register_form():
    return {
        "fields": {
            "name": f"Ad Soyad (min {validators.MIN_NAME} karakter)",
            "email": "E-posta",
            "password": f"Şifre (min {validators.MIN_PASSWORD} karakter)",
            "password_confirm": "Şifre (tekrar)",
        },
    }


@router.post("/login", response_model=LoginResponse, summary="E-posta + şifre ile giriş")
async def login(
    response: Response,
    email: str = Form("", description="E-posta"),
    password: str = Form("", description="Şifre (≥8 kr.)"),
    backend: Backend = Depends(get_backend),
):
    email = validators.validate_email(email)
    password = validators.validate_password(password)

    session = unwrap(await accounts.login(backend, email, password), "Giriş başarısız")
    set_session_cookie(response, backend.settings, session["session_cookie"], session["expires_in"])
    return LoginResponse(user_id=session["user_id"], expires_in=session["expires_in"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Kayıt: Firebase kullanıcısı + stajyer profili",
)
async def register(
    request: Request,
    response: Response,
    name: str = Form("", description="Ad Soyad"),
    email: str = Form("", description="E-posta"),
    password: str = Form("", description="Şifre (min 8 karakter)"),
    password_confirm: Optional[str] = Form(None, description="Şifre (tekrar)"),
    backend: Backend = Depends(get_backend),
):
    name = validators.validate_name(name)
    email = validators.validate_email(email)
    password = validators.validate_password(password)
    validators.validate_confirmation(password, password_confirm)

    # Önceki oturumu bırak
    old_cookie = extract_session_cookie(request, backend.settings.session_cookie_name)
    if old_cookie:
        accounts.logout(backend, old_cookie)

    data = unwrap(await accounts.register(backend, email, password, name), "Kayıt başarısız")
    set_session_cookie(response, backend.settings, data["session_cookie"], data["expires_in"])
    return RegisterResponse(
        user_id=data["user_id"],
        profile=UserProfile(**data["profile"]),
        expires_in=data["expires_in"],
    )


@router.post("/logout", response_model=MessageOut, summary="Oturumu kapat")
def logout(
    request: Request,
    response: Response,
    backend: Backend = Depends(get_backend),
):
    cookie = extract_session_cookie(request, backend.settings.session_cookie_name)
    if cookie:
        # Çıkış her durumda çerezi temizler; revoke hatası loglanır
        accounts.logout(backend, cookie)
    clear_session_cookie(response, backend.settings)
    return MessageOut(message="Çıkış yapıldı")


@router.get("/me", response_model=MeResponse, summary="Oturumdaki kullanıcı + menü")
def me(request: Request, principal: Principal = Depends(get_principal)):
    profile = UserProfile(**request.state.profile)
    menu = YONETICI_MENU_ITEMS if principal.is_manager else STAJYER_MENU_ITEMS
    return MeResponse(profile=profile, menu=menu)
