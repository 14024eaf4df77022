# stajyer_takip/core/guard.py
"""
Kenar istek filtresi: sayfa gezinmelerini (GET) yalnızca oturum çerezinin
varlığına göre yönlendirir. İmza / rol doğrulaması yapmaz; o iş bağımlılıklarda.
"""
from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

# Auth gerektirmeyen sayfalar
PUBLIC_ROUTES = ("/login", "/register")
# Filtrenin hiç dokunmadığı yollar
BYPASS_PREFIXES = ("/docs", "/redoc", "/openapi.json", "/health", "/static", "/favicon.ico")


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


class RouteGuardMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, cookie_name: str, enabled: bool = True):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.enabled = enabled

    async def dispatch(self, request, call_next):
        path = request.url.path
        if (
            not self.enabled
            or request.method != "GET"
            or path == "/"
            or any(_matches(path, p) for p in BYPASS_PREFIXES)
        ):
            return await call_next(request)

        is_public = any(_matches(path, p) for p in PUBLIC_ROUTES)
        has_session = bool(request.cookies.get(self.cookie_name))

        if not has_session and not is_public:
            return RedirectResponse(f"/login?{urlencode({'redirect': path})}", status_code=307)

        # Giriş yapmış kullanıcı login/register'a gelirse aktivitelere
        if has_session and is_public:
            return RedirectResponse("/activities", status_code=307)

        # Yönetici sayfaları için rol kontrolü burada yapılamaz (çerezde rol yok);
        # require_manager bağımlılığı yapar.
        return await call_next(request)
