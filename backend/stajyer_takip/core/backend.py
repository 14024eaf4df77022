# stajyer_takip/core/backend.py
"""
Harici servis tutamaçlarını tek bir nesnede toplar.

Servis fonksiyonları modül seviyesinde `db` kullanmak yerine `Backend` alır;
FastAPI tarafında `get_backend` bağımlılığı ile enjekte edilir, testlerde
`app.dependency_overrides` ile sahte bir örnekle değiştirilir.
"""
from functools import lru_cache

from stajyer_takip.config import Settings, get_firebase_app, get_firestore, get_settings
from stajyer_takip.integrations.firebase_auth import FirebaseAuthAdmin
from stajyer_takip.integrations.identity_toolkit import IdentityToolkit


class Backend:
    def __init__(self, db, auth, identity, settings: Settings):
        self.db = db
        self.auth = auth
        self.identity = identity
        self.settings = settings

    def users(self):
        return self.db.collection(self.settings.users_collection)

    def activities(self):
        return self.db.collection(self.settings.activities_collection)


@lru_cache
def get_backend() -> Backend:
    settings = get_settings()
    app = get_firebase_app()
    return Backend(
        db=get_firestore(),
        auth=FirebaseAuthAdmin(app),
        identity=IdentityToolkit(
            settings.firebase_web_api_key,
            settings.identity_toolkit_url,
            timeout=settings.http_timeout,
        ),
        settings=settings,
    )
