#!/usr/bin/env python3
"""
Firebase Admin SDK ile bir kullanıcının profil rolünü 'yonetici' yapar.
Uygulamanın kendisi rol değiştirmez; yönetici ataması bu script ile yapılır.
"""
import sys

from dotenv import load_dotenv

from stajyer_takip.core.backend import get_backend
from stajyer_takip.core.errors import ServiceError
from stajyer_takip.repositories import users as users_repo
from stajyer_takip.schemas.principal import ROLE_MANAGER

load_dotenv()


def set_manager_role(user_email: str) -> bool:
    """Kullanıcıyı e-posta ile bulur ve profilindeki rolü yönetici yapar."""
    try:
        backend = get_backend()
        print("✅ Firebase Admin SDK initialized")
    except Exception as e:
        print(f"❌ Firebase initialization failed: {e}")
        return False

    try:
        user = backend.auth.get_user_by_email(user_email)
        print(f"✅ User found: {user.uid} - {user.email}")

        existing = users_repo.find_by_user_id(backend, user.uid)
        if existing is None:
            print(f"❌ Profile not found for: {user_email}")
            return False

        profile = users_repo.update(backend, existing["id"], {"role": ROLE_MANAGER})
        print(f"✅ Role updated: {profile.get('name')} -> {profile.get('role')}")
        return True

    except ServiceError as e:
        print(f"❌ {e.message}: {user_email}")
        return False
    except Exception as e:
        print(f"❌ Error setting manager role: {e}")
        return False


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python set_manager_role.py <user_email>")
        print("Example: python set_manager_role.py yonetici@example.com")
        sys.exit(1)

    user_email = sys.argv[1]
    print(f"Setting manager role for: {user_email}")

    if set_manager_role(user_email):
        print("🎉 Manager role set successfully!")
        print("The change is visible on the user's next request.")
    else:
        print("💥 Failed to set manager role")
        sys.exit(1)
