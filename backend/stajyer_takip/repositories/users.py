# stajyer_takip/repositories/users.py
from typing import Any, Dict, Iterable, List, Optional

from google.cloud import firestore as gcf
from google.cloud.firestore_v1 import FieldFilter

# Firestore `in` filtresi tek sorguda en fazla 30 değer kabul eder
IN_QUERY_LIMIT = 30


def _ts(value):
    return value.to_datetime() if hasattr(value, "to_datetime") else value


def doc_to_profile(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    data["createdAt"] = _ts(data.get("createdAt"))
    data["updatedAt"] = _ts(data.get("updatedAt"))
    return data


def find_by_user_id(backend, user_id: str) -> Optional[Dict[str, Any]]:
    docs = list(
        backend.users()
        .where(filter=FieldFilter("userId", "==", user_id or ""))
        .limit(1)
        .stream()
    )
    return doc_to_profile(docs[0]) if docs else None


def find_by_user_ids(backend, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    uniq = list(dict.fromkeys(u for u in user_ids if u))
    mapping: Dict[str, Dict[str, Any]] = {}
    for i in range(0, len(uniq), IN_QUERY_LIMIT):
        chunk = uniq[i:i + IN_QUERY_LIMIT]
        q = backend.users().where(filter=FieldFilter("userId", "in", chunk))
        for snap in q.stream():
            profile = doc_to_profile(snap)
            mapping[profile["userId"]] = profile
    return mapping


def create(backend, *, user_id: str, name: str, email: str, role: str) -> Dict[str, Any]:
    # Doküman id'si = UID; aynı kimlik için ikinci profil oluşamaz
    ref = backend.users().document(user_id)
    ref.set({
        "userId": user_id,
        "name": name,
        "email": email,
        "role": role,
        "createdAt": gcf.SERVER_TIMESTAMP,
        "updatedAt": gcf.SERVER_TIMESTAMP,
    })
    return doc_to_profile(ref.get())


def update(backend, profile_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = backend.users().document(profile_id)
    ref.update({**data, "updatedAt": gcf.SERVER_TIMESTAMP})
    return doc_to_profile(ref.get())


def list_by_role(backend, role: str) -> List[Dict[str, Any]]:
    q = backend.users().where(filter=FieldFilter("role", "==", role))
    return [doc_to_profile(s) for s in q.stream()]


def count_by_role(backend, role: str) -> int:
    q = backend.users().where(filter=FieldFilter("role", "==", role))
    result = q.count(alias="total").get()
    return int(result[0][0].value)
