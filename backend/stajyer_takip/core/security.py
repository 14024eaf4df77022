"""
# `stajyer_takip/core/security.py` — Yetkilendirme Dokümantasyonu

Rol bazlı erişim tek noktada yapılır: profil istek başına bir kez çözülür
(`core/auth.py`), buradaki bağımlılıklar yalnızca rolü kontrol eder.

- `require_manager`: yalnızca `yonetici` rolünü kabul eder; diğerleri
  `403 Bu sayfaya erişim yetkiniz yok` alır ve `Location: /activities` başlığı döner.
- `require_owner`: aktivite sahibi değilse 403.
"""
from fastapi import Depends, HTTPException, status

from stajyer_takip.core.auth import get_principal
from stajyer_takip.schemas.principal import Principal

ACTIVITIES_URL = "/activities"
FORBIDDEN_PAGE = "Bu sayfaya erişim yetkiniz yok"


def require_manager(principal: Principal = Depends(get_principal)) -> Principal:
    """Sadece yönetici kullanıcıları kabul eder."""
    if not principal.is_manager:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=FORBIDDEN_PAGE,
            headers={"Location": ACTIVITIES_URL},
        )
    return principal


def require_owner(activity: dict, principal: Principal) -> None:
    """Düzenleme / silme yalnızca aktiviteyi oluşturana açıktır."""
    if activity.get("userId") != principal.uid:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Bu aktivite üzerinde işlem yetkiniz yok",
        )
