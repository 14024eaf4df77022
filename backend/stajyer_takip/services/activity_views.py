# stajyer_takip/services/activity_views.py — liste ekranları için satır hazırlama
from typing import Any, Dict, Iterable, List, Optional

from stajyer_takip.schemas.activity import ActivityRow
from stajyer_takip.services import accounts
from stajyer_takip.utils.categories import category_label
from stajyer_takip.utils.dates import format_long


def participant_map(backend, activities: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """Tüm katılımcılar için tek seferde {userId: ad}."""
    ids = set()
    for activity in activities:
        ids.update(activity.get("participantIds") or [activity.get("userId")])
    ids.discard(None)
    if not ids:
        return {}
    profiles = accounts.get_user_profiles_by_ids(backend, ids)
    return {uid: p.get("name") for uid, p in profiles.items() if p.get("name")}


def participant_names(activity: Dict[str, Any], names: Dict[str, str]) -> List[str]:
    ids = activity.get("participantIds") or [activity.get("userId")]
    resolved = [names[i] for i in ids if i in names]
    # Profil bulunamazsa dokümandaki denormalize adlar
    return resolved or list(activity.get("participantNames") or [])


def to_row(activity: Dict[str, Any], names: Dict[str, str], current_uid: Optional[str], tz_name: str) -> ActivityRow:
    return ActivityRow(
        **activity,
        dateDisplay=format_long(activity.get("date"), tz_name),
        badge=category_label(activity.get("category")),
        participants=participant_names(activity, names),
        addedBy=names.get(activity.get("userId")) or activity.get("userName") or "Bilinmeyen",
        canEdit=bool(current_uid) and activity.get("userId") == current_uid,
    )


def build_rows(backend, activities: List[Dict[str, Any]], current_uid: Optional[str]) -> List[ActivityRow]:
    names = participant_map(backend, activities)
    tz_name = backend.settings.timezone
    return [to_row(a, names, current_uid, tz_name) for a in activities]


def with_comment(activities: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [a for a in activities if (a.get("managerComment") or "").strip()]
