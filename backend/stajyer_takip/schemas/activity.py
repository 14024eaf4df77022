# stajyer_takip/schemas/activity.py
from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ActivityOut(BaseModel):
    """Firestore `activities` dokümanının API görünümü."""
    id: str
    userId: str
    userName: Optional[str] = None
    category: str
    description: str
    date: str = Field(..., description="ISO tarih (YYYY-MM-DD)")
    participantIds: List[str] = Field(default_factory=list)
    participantNames: List[str] = Field(default_factory=list)
    managerComment: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ActivityRow(ActivityOut):
    """Liste ekranında gösterilen satır: biçimli tarih, rozet, katılımcı adları."""
    dateDisplay: str = Field(..., description="'d MMMM yyyy' (tr)")
    badge: str
    participants: List[str] = Field(default_factory=list, description="Çözümlenmiş katılımcı adları")
    addedBy: str = "Bilinmeyen"
    canEdit: bool = False


class ActivityList(BaseModel):
    items: List[ActivityRow]
    total: int


class InternOption(BaseModel):
    userId: str
    name: str


class ActivityFormOptions(BaseModel):
    categories: List[str]
    interns: List[InternOption]


class ActivityMutationOut(BaseModel):
    message: str
    activity: Optional[ActivityOut] = None


class TimelineOut(BaseModel):
    keys: List[str] = Field(..., description="YYYY-MM-DD, eskiden yeniye")
    labels: List[str] = Field(..., description="'d MMM' (tr) eksen etiketleri")
    counts: Dict[str, int]
