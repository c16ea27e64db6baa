from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class MessageData:
    sender: str
    body: str
    timestamp: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageData":
        return cls(
            sender=str(data.get("from") or ""),
            body=str(data.get("body") or ""),
            timestamp=data.get("timestamp") or 0,
        )


@dataclass
class MissedMessages:
    messages: List[MessageData] = field(default_factory=list)
    has_new_messages: bool = False

    @property
    def last(self) -> Optional[MessageData]:
        return self.messages[-1] if self.messages else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissedMessages":
        return cls(
            messages=[MessageData.from_dict(m) for m in data.get("messages") or []],
            has_new_messages=bool(data.get("hasNewMessages", False)),
        )


@dataclass
class Contact:
    name: str
    pushname: str
    id: str
    phone: str

    @property
    def display_name(self) -> str:
        """Name, then push name, then phone number."""
        return self.name or self.pushname or self.phone

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        return cls(
            name=data.get("name") or "",
            pushname=data.get("pushname") or "",
            id=data.get("id") or "",
            phone=data.get("phone") or "",
        )


@dataclass
class Chat:
    name: str
    id: str
    unread_count: int = 0
    last_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chat":
        return cls(
            name=data.get("name") or data.get("id") or "",
            id=data.get("id") or "",
            unread_count=int(data.get("unreadCount") or 0),
            last_message=data.get("lastMessage") or None,
        )


@dataclass
class Playlist:
    """A YouTube playlist, or an item inside one."""
    id: str
    title: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playlist":
        # YouTube resources keep the title under snippet
        snippet = data.get("snippet") or {}
        return cls(
            id=data.get("id") or "",
            title=snippet.get("title") or data.get("title") or "",
        )


PlaylistItem = Playlist


@dataclass
class HealthResult:
    url: str
    healthy: bool
