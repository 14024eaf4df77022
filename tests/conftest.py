"""
Test altyapısı: Firestore, Firebase Auth adaptörü ve Identity Toolkit için bellek içi sahteler.
Uygulamaya `app.dependency_overrides[get_backend]` ile enjekte edilir.
"""
import copy
import itertools
import os
from datetime import datetime, timezone
from types import SimpleNamespace

os.environ.setdefault("FIREBASE_WEB_API_KEY", "AIzaTestKey")
os.environ.setdefault("FIREBASE_PROJECT_ID", "stajyer-test")
os.environ.setdefault("ROUTE_GUARD_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient
from google.api_core.exceptions import NotFound
from google.cloud import firestore as gcf

from stajyer_takip.config import Settings
from stajyer_takip.core.backend import Backend, get_backend
from stajyer_takip.core.errors import ErrorCode, ServiceError
from stajyer_takip.main import app


# --------------------------------------------------------------------------- #
# Firestore
# --------------------------------------------------------------------------- #

_OPS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    ">=": lambda a, b: a >= b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    "<": lambda a, b: a < b,
    "in": lambda a, b: a in b,
    "array_contains": lambda a, b: isinstance(a, list) and b in a,
}


def _resolve(data):
    now = datetime.now(timezone.utc)
    return {k: (now if v is gcf.SERVER_TIMESTAMP else copy.deepcopy(v)) for k, v in data.items()}


class FakeFirestore:
    def __init__(self):
        self.data = {}
        self.failing = False
        self._ids = itertools.count(1)

    def check(self):
        if self.failing:
            raise RuntimeError("firestore unavailable")

    def docs(self, collection):
        return self.data.setdefault(collection, {})

    def collection(self, name):
        return FakeQuery(self, name)


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, db, collection, doc_id):
        self.db = db
        self.collection = collection
        self.id = doc_id

    def get(self):
        self.db.check()
        return FakeSnapshot(self, copy.deepcopy(self.db.docs(self.collection).get(self.id)))

    def set(self, data, merge=False):
        self.db.check()
        docs = self.db.docs(self.collection)
        if merge and self.id in docs:
            docs[self.id].update(_resolve(data))
        else:
            docs[self.id] = _resolve(data)

    def update(self, data):
        self.db.check()
        docs = self.db.docs(self.collection)
        if self.id not in docs:
            raise NotFound(f"No document to update: {self.id}")
        docs[self.id].update(_resolve(data))

    def delete(self):
        self.db.check()
        self.db.docs(self.collection).pop(self.id, None)


class FakeAggregation:
    def __init__(self, query, alias):
        self.query = query
        self.alias = alias

    def get(self):
        total = len(list(self.query._clone(limit=None, offset=0, orders=()).stream()))
        return [[SimpleNamespace(alias=self.alias, value=total)]]


class FakeQuery:
    def __init__(self, db, collection, filters=(), orders=(), limit=None, offset=0):
        self.db = db
        self.collection_name = collection
        self.filters = tuple(filters)
        self.orders = tuple(orders)
        self._limit = limit
        self._offset = offset

    def _clone(self, **changes):
        params = dict(
            filters=self.filters, orders=self.orders, limit=self._limit, offset=self._offset
        )
        params.update(changes)
        return FakeQuery(self.db, self.collection_name, **params)

    def document(self, doc_id=None):
        return FakeDocument(self.db, self.collection_name, doc_id or f"doc{next(self.db._ids):04d}")

    def where(self, field_path=None, op_string=None, value=None, *, filter=None):
        if filter is not None:
            field_path, op_string, value = filter.field_path, filter.op_string, filter.value
        return self._clone(filters=self.filters + ((field_path, op_string, value),))

    def order_by(self, field_path, direction=gcf.Query.ASCENDING):
        return self._clone(orders=self.orders + ((field_path, direction),))

    def limit(self, count):
        return self._clone(limit=count)

    def offset(self, count):
        return self._clone(offset=count)

    def count(self, alias=None):
        return FakeAggregation(self, alias)

    def _matches(self, data):
        for field, op, value in self.filters:
            if field not in data or not _OPS[op](data[field], value):
                return False
        return True

    def stream(self):
        self.db.check()
        items = [(i, d) for i, d in self.db.docs(self.collection_name).items() if self._matches(d)]
        for field, direction in reversed(self.orders):
            items = [item for item in items if field in item[1]]
            items.sort(key=lambda item: item[1][field], reverse=direction == gcf.Query.DESCENDING)
        items = items[self._offset:]
        if self._limit is not None:
            items = items[:self._limit]
        for doc_id, data in items:
            yield FakeSnapshot(FakeDocument(self.db, self.collection_name, doc_id), copy.deepcopy(data))

    def get(self):
        return list(self.stream())


# --------------------------------------------------------------------------- #
# Firebase Auth + Identity Toolkit
# --------------------------------------------------------------------------- #

class FakeAuth:
    def __init__(self):
        self.users = {}
        self.sessions = {}
        self.revoked = []
        self._seq = itertools.count(1)

    def create_user(self, *, email, password, display_name):
        if any(u.email == email for u in self.users.values()):
            raise ServiceError(ErrorCode.EMAIL_EXISTS, "Bu e-posta adresi zaten kayıtlı")
        uid = f"uid{next(self._seq):03d}"
        user = SimpleNamespace(uid=uid, email=email, display_name=display_name, password=password)
        self.users[uid] = user
        return user

    def get_user(self, uid):
        if uid not in self.users:
            raise ServiceError(ErrorCode.NOT_FOUND, "Kullanıcı bulunamadı")
        return self.users[uid]

    def get_user_by_email(self, email):
        for user in self.users.values():
            if user.email == email:
                return user
        raise ServiceError(ErrorCode.NOT_FOUND, "Kullanıcı bulunamadı")

    def update_user(self, uid, **kwargs):
        user = self.get_user(uid)
        if "password" in kwargs:
            user.password = kwargs["password"]
            self.revoke_refresh_tokens(uid)
        return user

    def revoke_refresh_tokens(self, uid):
        self.revoked.append(uid)
        for cookie in [c for c, owner in self.sessions.items() if owner == uid]:
            del self.sessions[cookie]

    def create_session_cookie(self, id_token, expires_in):
        uid = id_token.replace("id-token-", "", 1)
        cookie = f"session-{uid}-{next(self._seq)}"
        self.sessions[cookie] = uid
        return cookie

    def verify_session_cookie(self, session_cookie):
        uid = self.sessions.get(session_cookie)
        if uid is None:
            raise ServiceError(ErrorCode.UNAUTHENTICATED, "Geçersiz oturum")
        user = self.users[uid]
        return {"uid": uid, "email": user.email, "name": user.display_name}

    def active_sessions(self, uid):
        return [c for c, owner in self.sessions.items() if owner == uid]


class FakeIdentity:
    def __init__(self, auth):
        self.auth = auth

    async def sign_in_with_password(self, email, password):
        user = next((u for u in self.auth.users.values() if u.email == email), None)
        if user is None or user.password != password:
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, "E-posta veya şifre hatalı")
        return {
            "idToken": f"id-token-{user.uid}",
            "refreshToken": f"refresh-{user.uid}",
            "expiresIn": "3600",
            "localId": user.uid,
        }


# --------------------------------------------------------------------------- #
# Fixtures
# --------------------------------------------------------------------------- #

def build_backend(**overrides) -> Backend:
    settings = Settings(_env_file=None, firebase_web_api_key="AIzaTestKey", **overrides)
    auth = FakeAuth()
    return Backend(db=FakeFirestore(), auth=auth, identity=FakeIdentity(auth), settings=settings)


@pytest.fixture
def make_backend():
    return build_backend


@pytest.fixture
def backend():
    return build_backend()


@pytest.fixture
def client(backend):
    app.dependency_overrides[get_backend] = lambda: backend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_member(backend, name, email, role="stajyer", password="gizli-sifre-1"):
    """Auth kullanıcısı + Firestore profili oluşturur, UID döner."""
    user = backend.auth.create_user(email=email, password=password, display_name=name)
    backend.users().document(user.uid).set({
        "userId": user.uid,
        "name": name,
        "email": email,
        "role": role,
        "createdAt": datetime(2024, 5, 20, 9, 0, tzinfo=timezone.utc),
    })
    return user.uid


def add_activity(backend, user_id, user_name, category, date, description="Günlük görev tamamlandı", **extra):
    ref = backend.activities().document()
    ref.set({
        "userId": user_id,
        "userName": user_name,
        "category": category,
        "description": description,
        "date": date,
        "participantIds": [user_id],
        "participantNames": [user_name],
        **extra,
    })
    return ref.id


def sign_in(client, backend, uid):
    cookie = backend.auth.create_session_cookie(f"id-token-{uid}", 3600)
    client.cookies.set(backend.settings.session_cookie_name, cookie)
    return cookie


@pytest.fixture
def intern(backend):
    return add_member(backend, "Ayşe Yılmaz", "ayse@example.com")


@pytest.fixture
def manager(backend):
    return add_member(backend, "Mehmet Demir", "mehmet@example.com", role="yonetici")
