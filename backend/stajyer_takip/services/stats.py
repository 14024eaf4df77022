"""
# `stajyer_takip/services/stats.py` — Dashboard İstatistikleri

## Genel Bilgi
Yönetici paneli için sayım ve gruplama işlemleri.

- Toplamlar (`get_total_interns`, `get_total_activities`) Firestore **count** aggregation
  sorgusu ile sunucu tarafında hesaplanır.
- Gruplamalar (en aktif stajyer, kategori dağılımı, zaman çizelgesi, bugün aktif olanlar)
  aktiviteleri `limit`/`offset` sayfalarıyla tarar. Tarama `STATS_MAX_ROWS` ile sınırlıdır;
  sınıra ulaşılırsa sonuç `truncated=True` olarak işaretlenir.

## Sonuç Tipi
Her fonksiyon `StatResult` döndürür ve hata fırlatmaz:
- `ok` / `empty` → sorgu başarılı
- `failed` → Firestore hatası, `value` varsayılan değerde (0 / boş)

## Eşitlik Kuralı
En aktif stajyerde sayılar eşitse, tarih azalan taramada **ilk karşılaşılan** (en son
aktivite giren) stajyer seçilir.
"""
import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from google.cloud.firestore_v1 import FieldFilter

from stajyer_takip.repositories import activities as activities_repo
from stajyer_takip.repositories import users as users_repo
from stajyer_takip.schemas.principal import ROLE_INTERN
from stajyer_takip.schemas.stats import MostActiveIntern, StatResult
from stajyer_takip.utils.categories import category_label
from stajyer_takip.utils.dates import date_key, format_short, timeline_keys, today_in

logger = logging.getLogger("stajyer.stats")


# --------------------------------------------------------------------------- #
# Saf indirgeyiciler (öğrenci detay ekranı da kullanır)
# --------------------------------------------------------------------------- #

def count_by_user(rows: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """userId → {count, userName}; ilk görülme sırası korunur."""
    counts: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        uid = row.get("userId")
        if not uid:
            continue
        if uid not in counts:
            counts[uid] = {"count": 0, "userName": row.get("userName") or "Bilinmeyen"}
        counts[uid]["count"] += 1
    return counts


def pick_most_active(counts: Dict[str, Dict[str, Any]]) -> MostActiveIntern:
    best = MostActiveIntern()
    for uid, entry in counts.items():
        # Eşitlikte ilk karşılaşılan kalır
        if entry["count"] > best.count:
            best = MostActiveIntern(userId=uid, name=entry["userName"], count=entry["count"])
    return best


def category_distribution(rows: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    counter = Counter(category_label(row.get("category")) for row in rows)
    return dict(counter)


def build_timeline(
    rows: Iterable[Dict[str, Any]],
    days: int,
    today: date,
    tz_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Bugünle biten `days` günlük, sıfırla doldurulmuş sayım. Pencere dışı kayıtlar yok sayılır."""
    keys = timeline_keys(days, today)
    counts = {key: 0 for key in keys}
    for row in rows:
        key = date_key(row.get("date"), tz_name)
        if key in counts:
            counts[key] += 1
    return {
        "keys": keys,
        "labels": [format_short(k, with_year=False) for k in keys],
        "counts": counts,
    }


# --------------------------------------------------------------------------- #
# Firestore taraması
# --------------------------------------------------------------------------- #

def scan_activities(backend, filters: Sequence[FieldFilter] = ()) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Aktiviteleri sayfa sayfa (tarih azalan) okur.
    Döner: (satırlar, truncated). Üst sınır `settings.stats_max_rows`.
    """
    page_size = max(1, backend.settings.stats_page_size)
    cap = max(1, backend.settings.stats_max_rows)
    rows: List[Dict[str, Any]] = []
    while len(rows) < cap:
        want = min(page_size, cap - len(rows))
        batch = activities_repo.fetch(backend, filters, limit=want, offset=len(rows))
        rows.extend(batch)
        if len(batch) < want:
            return rows, False
    more = activities_repo.fetch(backend, filters, limit=1, offset=len(rows))
    if more:
        logger.warning("Activity scan hit STATS_MAX_ROWS=%s; statistics are truncated", cap)
    return rows, bool(more)


def _result(value: Any, empty: bool, *, truncated: bool = False, scanned: int = 0) -> StatResult:
    return StatResult(
        status="empty" if empty else "ok",
        value=value,
        truncated=truncated,
        scanned=scanned,
    )


def _failed(default: Any, exc: Exception) -> StatResult:
    return StatResult(status="failed", value=default, error=str(exc) or exc.__class__.__name__)


# --------------------------------------------------------------------------- #
# İstatistikler
# --------------------------------------------------------------------------- #

def get_total_interns(backend) -> StatResult:
    try:
        total = users_repo.count_by_role(backend, ROLE_INTERN)
        return _result(total, total == 0)
    except Exception as exc:
        logger.error("Get total interns error: %s", exc)
        return _failed(0, exc)


def get_total_activities(backend) -> StatResult:
    try:
        total = activities_repo.count(backend)
        return _result(total, total == 0)
    except Exception as exc:
        logger.error("Get total activities error: %s", exc)
        return _failed(0, exc)


def get_today_active_interns(backend, today: Optional[date] = None) -> StatResult:
    today = today or today_in(backend.settings.timezone)
    try:
        rows, truncated = scan_activities(backend, [FieldFilter("date", ">=", today.isoformat())])
        # Tam ISO tarihli eski kayıtlar için gün anahtarını tekrar kontrol et
        key = today.isoformat()
        users = {
            r.get("userId") for r in rows
            if r.get("userId") and date_key(r.get("date"), backend.settings.timezone) >= key
        }
        return _result(len(users), not users, truncated=truncated, scanned=len(rows))
    except Exception as exc:
        logger.error("Get today active interns error: %s", exc)
        return _failed(0, exc)


def get_most_active_intern(backend) -> StatResult:
    try:
        rows, truncated = scan_activities(backend)
        best = pick_most_active(count_by_user(rows))
        return _result(best.model_dump(), best.count == 0, truncated=truncated, scanned=len(rows))
    except Exception as exc:
        logger.error("Get most active intern error: %s", exc)
        return _failed(MostActiveIntern().model_dump(), exc)


def get_category_distribution(backend) -> StatResult:
    try:
        rows, truncated = scan_activities(backend)
        distribution = category_distribution(rows)
        return _result(distribution, not distribution, truncated=truncated, scanned=len(rows))
    except Exception as exc:
        logger.error("Get category distribution error: %s", exc)
        return _failed({}, exc)


def get_activity_timeline(backend, days: int = 7, today: Optional[date] = None) -> StatResult:
    tz_name = backend.settings.timezone
    today = today or today_in(tz_name)
    empty_timeline = build_timeline([], days, today)
    if days < 1:
        return _result(empty_timeline, True)
    try:
        start = empty_timeline["keys"][0]
        rows, truncated = scan_activities(backend, [FieldFilter("date", ">=", start)])
        timeline = build_timeline(rows, days, today, tz_name)
        total = sum(timeline["counts"].values())
        return _result(timeline, total == 0, truncated=truncated, scanned=len(rows))
    except Exception as exc:
        logger.error("Get activity timeline error: %s", exc)
        return _failed(empty_timeline, exc)
