"""
# `stajyer_takip/main.py` — Ana Uygulama Dokümantasyonu

## Genel Bilgi
FastAPI uygulamasının başlangıç noktası. Router’lar eklenir, CORS ve kenar filtresi
(route guard) ayarlanır, beklenmeyen hatalar için genel bir yakalayıcı bağlanır.

---

## Router Dahil Etme
**Herkese açık:** `/login`, `/register`, `/health`

**Oturum gerektiren:** `/logout`, `/me`, `/activities`, `/notifications`, `/settings`

**Yönetici (`require_manager`):** `/dashboard`, `/students`

---

## Kenar Filtresi
`ROUTE_GUARD_ENABLED=true` iken GET gezinmeleri oturum çerezinin varlığına göre
`/login?redirect=...` veya `/activities`'e yönlendirilir. Kapalıyken yalnızca
sayfa bağımlılıkları (`get_principal`, `require_manager`) kontrol eder.

"""
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from stajyer_takip.config import get_settings
from stajyer_takip.core.auth import get_optional_principal
from stajyer_takip.core.guard import RouteGuardMiddleware
from stajyer_takip.routers import activities, auth, dashboard, notifications, students
from stajyer_takip.routers import settings as settings_router
from stajyer_takip.schemas.principal import Principal

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("stajyer.main")

# Initialize FastAPI app
app = FastAPI(
    title="Stajyer Takip API",
    description="Stajyer günlük aktivite takibi, yönetici yorumları ve istatistikler.",
    version="1.0.0",
    debug=settings.debug,
    redirect_slashes=False,
)

# Configure CORS (allow front-end domain or all origins as specified)
allow_origins = [origin.strip() for origin in settings.allowed_origins.split(',')] if settings.allowed_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    RouteGuardMiddleware,
    cookie_name=settings.session_cookie_name,
    enabled=settings.route_guard_enabled,
)

app.include_router(auth.router)
app.include_router(activities.router)
app.include_router(notifications.router)
app.include_router(settings_router.router)

# Yönetici router'ları (require_manager ile korunur)
app.include_router(dashboard.router)
app.include_router(students.router)


@app.exception_handler(Exception)
async def _unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Bir hata oluştu"})


@app.get("/", include_in_schema=False)
def home(principal: Principal = Depends(get_optional_principal)):
    """Rolüne göre yönlendir: yönetici → panel, stajyer → aktiviteler, oturum yok → giriş."""
    if principal is None:
        return RedirectResponse("/login")
    if principal.is_manager:
        return RedirectResponse("/dashboard")
    return RedirectResponse("/activities")


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("stajyer_takip.main:app", host="0.0.0.0", port=8000, reload=True)
