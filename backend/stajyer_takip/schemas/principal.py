"""
stajyer_takip/schemas/principal.py
Roller ve Principal modeli.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

Role = Literal["stajyer", "yonetici"]

ROLE_INTERN: Role = "stajyer"
ROLE_MANAGER: Role = "yonetici"


class Principal(BaseModel):
    uid: str = Field(..., description="Firebase UID")
    role: Role = Field(..., description="stajyer | yonetici")
    profile_id: str = Field(..., description="users koleksiyonundaki doküman id'si")
    name: str = Field("", description="Görünen ad")
    email: Optional[str] = Field(None, description="E-posta (varsa)")

    @property
    def is_manager(self) -> bool:
        return self.role == ROLE_MANAGER
