from conftest import add_activity, add_member
from google.cloud.firestore_v1 import FieldFilter

from stajyer_takip.core.errors import ErrorCode
from stajyer_takip.services import activities as svc


def _new(backend, uid, name, **overrides):
    data = {
        "userId": uid,
        "userName": name,
        "category": "Yazılım",
        "description": "API uçları yazıldı",
        "date": "2024-06-01",
    }
    data.update(overrides)
    return svc.create_activity(backend, data)


def test_creator_is_always_first_participant(backend, intern):
    other = add_member(backend, "Can Öz", "can@example.com")

    created = _new(backend, intern, "Ayşe Yılmaz", participantIds=[other, intern, other])
    assert created.success
    activity = created.data
    assert activity["participantIds"] == [intern, other]
    assert activity["participantNames"] == ["Ayşe Yılmaz", "Can Öz"]
    assert activity["createdAt"] is not None


def test_create_without_participants(backend, intern):
    activity = _new(backend, intern, "Ayşe Yılmaz").data
    assert activity["participantIds"] == [intern]


def test_update_never_changes_ownership(backend, intern):
    activity = _new(backend, intern, "Ayşe Yılmaz").data

    updated = svc.update_activity(backend, activity["id"], {
        "userId": "baska-biri",
        "userName": "Sahte",
        "description": "Açıklama güncellendi",
    })
    assert updated.success
    assert updated.data["userId"] == intern
    assert updated.data["userName"] == "Ayşe Yılmaz"
    assert updated.data["description"] == "Açıklama güncellendi"
    assert updated.data["category"] == "Yazılım"


def test_update_participants_keeps_creator(backend, intern):
    other = add_member(backend, "Can Öz", "can@example.com")
    activity = _new(backend, intern, "Ayşe Yılmaz", participantIds=[other]).data

    updated = svc.update_activity(backend, activity["id"], {"participantIds": []}).data
    assert updated["participantIds"] == [intern]
    assert updated["participantNames"] == ["Ayşe Yılmaz"]


def test_missing_activity(backend):
    assert svc.get_activity(backend, "yok").code == ErrorCode.NOT_FOUND
    assert svc.update_activity(backend, "yok", {"description": "x" * 12}).code == ErrorCode.NOT_FOUND


def test_delete(backend, intern):
    activity = _new(backend, intern, "Ayşe Yılmaz").data
    assert svc.delete_activity(backend, activity["id"]).success
    assert svc.get_activity(backend, activity["id"]).code == ErrorCode.NOT_FOUND


def test_manager_comment_is_trimmed_and_clearable(backend, intern):
    activity = _new(backend, intern, "Ayşe Yılmaz").data

    commented = svc.set_manager_comment(backend, activity["id"], "  Güzel iş  ").data
    assert commented["managerComment"] == "Güzel iş"
    assert commented["userId"] == intern

    cleared = svc.set_manager_comment(backend, activity["id"], "   ").data
    assert cleared["managerComment"] == ""


def test_activities_by_user_newest_first(backend, intern):
    other = add_member(backend, "Can Öz", "can@example.com")
    add_activity(backend, intern, "Ayşe Yılmaz", "Yazılım", "2024-06-01")
    add_activity(backend, intern, "Ayşe Yılmaz", "Toplantı", "2024-06-03")
    add_activity(backend, other, "Can Öz", "Test", "2024-06-02")

    result = svc.get_activity_by_user(backend, intern)
    assert result.data["total"] == 2
    assert [a["date"] for a in result.data["documents"]] == ["2024-06-03", "2024-06-01"]
    assert svc.count_by_user(backend, other).data == 1


def test_list_all_pages_with_limit_and_offset(backend, intern):
    for day in range(1, 6):
        add_activity(backend, intern, "Ayşe Yılmaz", "Yazılım", f"2024-06-0{day}")

    page = svc.list_all_activities(backend, limit=2, offset=1).data
    assert page["total"] == 5
    assert [a["date"] for a in page["documents"]] == ["2024-06-04", "2024-06-03"]


def test_list_activities_with_filters(backend, intern):
    add_activity(backend, intern, "Ayşe Yılmaz", "Yazılım", "2024-06-01")
    add_activity(backend, intern, "Ayşe Yılmaz", "Toplantı", "2024-06-02")

    result = svc.list_activities(backend, [FieldFilter("category", "==", "Toplantı")])
    assert result.data["total"] == 1
    assert result.data["documents"][0]["category"] == "Toplantı"


def test_legacy_document_without_participants(backend, intern):
    ref = backend.activities().document()
    ref.set({
        "userId": intern,
        "userName": "Ayşe Yılmaz",
        "category": "Yazılım",
        "description": "Eski kayıt açıklaması",
        "date": "2024-05-01T09:00:00.000Z",
    })
    activity = svc.get_activity(backend, ref.id).data
    assert activity["participantIds"] == [intern]
    assert activity["participantNames"] == []


def test_backend_errors_become_results(backend, intern):
    backend.db.failing = True
    result = svc.get_activity_by_user(backend, intern)
    assert not result.success
    assert result.code == ErrorCode.BACKEND_ERROR
    assert result.error == "firestore unavailable"
