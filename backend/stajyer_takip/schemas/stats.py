"""
stajyer_takip/schemas/stats.py
Dashboard istatistik modelleri.

`StatResult` "veri yok" ile "getirilemedi" durumlarını ayırır:
- ok     → değer hesaplandı
- empty  → sorgu başarılı, ama hiç kayıt yok
- failed → Firestore hatası; `value` varsayılan (0 / boş) kalır, `error` doludur
`truncated=True` ise tarama `STATS_MAX_ROWS` sınırına takılmıştır.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from stajyer_takip.schemas.activity import ActivityOut, ActivityRow, TimelineOut
from stajyer_takip.schemas.user import UserProfile

StatStatus = Literal["ok", "empty", "failed"]


class StatResult(BaseModel):
    status: StatStatus
    value: Any = None
    error: Optional[str] = None
    truncated: bool = False
    scanned: int = 0


class MostActiveIntern(BaseModel):
    userId: Optional[str] = None
    name: str = "Henüz yok"
    count: int = 0


class DashboardOut(BaseModel):
    totalInterns: StatResult
    todayActive: StatResult
    totalActivities: StatResult
    mostActiveIntern: StatResult
    categoryDistribution: StatResult
    timeline: StatResult
    recentActivities: List[ActivityOut]


class StudentDetailOut(BaseModel):
    profile: UserProfile
    registeredAt: Optional[str] = None
    activities: List[ActivityRow]
    categoryDistribution: Dict[str, int]
    timeline: TimelineOut
