from typing import Any, Dict, Optional
from sqlmodel import Session
from inkpress.core.time import utcnow
from inkpress.models.user import User

PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")

class UserService:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def upsert(self, claims: Dict[str, Any]) -> User:
        """
        Create or refresh a user from identity provider claims, keyed by ``sub``.
        Profile claims present in the token are copied; ``is_admin`` is never
        set from claims.
        """
        user_id = claims["sub"]
        profile = {key: claims[key] for key in PROFILE_CLAIMS if key in claims}

        user = self.get(user_id)
        if user is None:
            user = User(id=user_id, **profile)
        else:
            changed = False
            for key, value in profile.items():
                if getattr(user, key) != value:
                    setattr(user, key, value)
                    changed = True
            if not changed:
                return user
            user.updated_at = utcnow()

        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_admin(self, user_id: str, is_admin: bool) -> Optional[User]:
        user = self.get(user_id)
        if not user:
            return None

        user.is_admin = is_admin
        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
