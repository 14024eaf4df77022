"""
stajyer_takip/services/activities.py
Aktivite CRUD erişim katmanı. Her fonksiyon tek bir Firestore işlemine karşılık gelir
ve hataları `Result.error` mesajı olarak döndürür.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from google.cloud.firestore_v1 import FieldFilter

from stajyer_takip.core.errors import ErrorCode, Result
from stajyer_takip.repositories import activities as activities_repo
from stajyer_takip.services import accounts

logger = logging.getLogger("stajyer.activities")


def resolve_participants(
    backend,
    creator_id: str,
    creator_name: Optional[str],
    participant_ids: Optional[Iterable[str]] = None,
) -> Tuple[List[str], List[str]]:
    """Oluşturan her zaman ilk katılımcıdır; adlar profillerden çözülür."""
    ids = list(dict.fromkeys([creator_id, *(participant_ids or [])]))
    ids = [i for i in ids if i]
    others = [i for i in ids if i != creator_id]
    profiles = accounts.get_user_profiles_by_ids(backend, others) if others else {}
    names = []
    for uid in ids:
        name = creator_name if uid == creator_id else (profiles.get(uid) or {}).get("name")
        if name:
            names.append(name)
    return ids, names


def create_activity(backend, data: Dict[str, Any]) -> Result:
    try:
        ids, names = resolve_participants(
            backend, data["userId"], data.get("userName"), data.get("participantIds")
        )
        doc = {
            "userId": data["userId"],
            "userName": data.get("userName") or "",
            "category": data["category"],
            "description": data["description"],
            "date": data["date"],
            "participantIds": ids,
            "participantNames": names,
        }
        return Result.ok(activities_repo.create(backend, doc))
    except Exception as exc:
        logger.error("Create activity error: %s", exc)
        return Result.from_exception(exc, "Aktivite oluşturulamadı")


def get_activity(backend, activity_id: str) -> Result:
    try:
        activity = activities_repo.get(backend, activity_id)
    except Exception as exc:
        logger.error("Get activity error: %s", exc)
        return Result.from_exception(exc, "Aktivite yüklenemedi")
    if activity is None:
        return Result.fail("Aktivite bulunamadı", ErrorCode.NOT_FOUND)
    return Result.ok(activity)


def update_activity(backend, activity_id: str, data: Dict[str, Any]) -> Result:
    """
    Kısmi güncelleme. `userId` / `userName` payload'a hiç girmez.
    `participantIds` gönderilirse oluşturan yeniden eklenir ve adlar yeniden çözülür.
    """
    try:
        current = activities_repo.get(backend, activity_id)
        if current is None:
            return Result.fail("Aktivite bulunamadı", ErrorCode.NOT_FOUND)

        payload = {k: v for k, v in data.items() if k not in activities_repo.OWNERSHIP_FIELDS}
        if "participantIds" in payload:
            ids, names = resolve_participants(
                backend, current["userId"], current.get("userName"), payload["participantIds"]
            )
            payload["participantIds"] = ids
            payload["participantNames"] = names
        return Result.ok(activities_repo.update(backend, activity_id, payload))
    except Exception as exc:
        logger.error("Update activity error: %s", exc)
        return Result.from_exception(exc, "Aktivite güncellenemedi")


def set_manager_comment(backend, activity_id: str, comment: str) -> Result:
    return update_activity(backend, activity_id, {"managerComment": (comment or "").strip()})


def delete_activity(backend, activity_id: str) -> Result:
    try:
        activities_repo.delete(backend, activity_id)
        return Result.ok()
    except Exception as exc:
        logger.error("Delete activity error: %s", exc)
        return Result.from_exception(exc, "Aktivite silinemedi")


def get_activity_by_user(backend, user_id: str, limit: int = 100) -> Result:
    try:
        filters = [FieldFilter("userId", "==", user_id)]
        documents = activities_repo.fetch(backend, filters, limit=limit)
        total = activities_repo.count(backend, filters)
        return Result.ok({"documents": documents, "total": total})
    except Exception as exc:
        logger.error("Get activity by user error: %s", exc)
        return Result.from_exception(exc, "Aktiviteler getirilemedi")


def count_by_user(backend, user_id: str) -> Result:
    try:
        return Result.ok(activities_repo.count(backend, [FieldFilter("userId", "==", user_id)]))
    except Exception as exc:
        logger.error("Count activities error: %s", exc)
        return Result.from_exception(exc, "Aktivite sayısı getirilemedi")


def list_all_activities(backend, limit: int = 100, offset: int = 0) -> Result:
    try:
        documents = activities_repo.fetch(backend, limit=limit, offset=offset)
        total = activities_repo.count(backend)
        return Result.ok({"documents": documents, "total": total})
    except Exception as exc:
        logger.error("List all activities error: %s", exc)
        return Result.from_exception(exc, "Aktiviteler getirilemedi")


def list_activities(backend, queries: Sequence[FieldFilter] = ()) -> Result:
    """Çağıranın verdiği filtrelerle genel liste (tarih azalan)."""
    try:
        documents = activities_repo.fetch(backend, queries)
        return Result.ok({"documents": documents, "total": len(documents)})
    except Exception as exc:
        logger.error("List activities error: %s", exc)
        return Result.from_exception(exc, "Aktiviteler getirilemedi")
