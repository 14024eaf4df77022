# stajyer_takip/repositories/activities.py
from typing import Any, Dict, List, Optional, Sequence

from google.cloud import firestore as gcf

from stajyer_takip.utils.categories import category_label

# Güncellemede asla yazılmayan sahiplik alanları
OWNERSHIP_FIELDS = ("userId", "userName")


def _ts(value):
    return value.to_datetime() if hasattr(value, "to_datetime") else value


def doc_to_activity(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    # Kategorisi / açıklaması olmayan eski kayıtlar
    data["category"] = category_label(data.get("category"))
    data["description"] = data.get("description") or ""
    ids = data.get("participantIds")
    # Eski kayıtlarda katılımcı alanı yok → yalnızca oluşturan
    data["participantIds"] = ids if isinstance(ids, list) and ids else [data.get("userId")]
    names = data.get("participantNames")
    data["participantNames"] = names if isinstance(names, list) else []
    data["createdAt"] = _ts(data.get("createdAt"))
    data["updatedAt"] = _ts(data.get("updatedAt"))
    when = _ts(data.get("date"))
    data["date"] = when.isoformat() if hasattr(when, "isoformat") else (when or "")
    return data


def create(backend, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = backend.activities().document()
    ref.set({
        **data,
        "createdAt": gcf.SERVER_TIMESTAMP,
        "updatedAt": gcf.SERVER_TIMESTAMP,
    })
    return doc_to_activity(ref.get())


def get(backend, activity_id: str) -> Optional[Dict[str, Any]]:
    snap = backend.activities().document(activity_id).get()
    return doc_to_activity(snap) if snap.exists else None


def update(backend, activity_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {k: v for k, v in data.items() if k not in OWNERSHIP_FIELDS}
    ref = backend.activities().document(activity_id)
    ref.update({**payload, "updatedAt": gcf.SERVER_TIMESTAMP})
    return doc_to_activity(ref.get())


def delete(backend, activity_id: str) -> None:
    backend.activities().document(activity_id).delete()


def build_query(backend, filters: Sequence = (), *, order_by_date: bool = True):
    q = backend.activities()
    for f in filters:
        q = q.where(filter=f)
    if order_by_date:
        q = q.order_by("date", direction=gcf.Query.DESCENDING)  # yeni→eski
    return q


def fetch(backend, filters: Sequence = (), *, limit: Optional[int] = None, offset: int = 0) -> List[Dict[str, Any]]:
    q = build_query(backend, filters)
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return [doc_to_activity(s) for s in q.stream()]


def count(backend, filters: Sequence = ()) -> int:
    q = build_query(backend, filters, order_by_date=False)
    result = q.count(alias="total").get()
    return int(result[0][0].value)
