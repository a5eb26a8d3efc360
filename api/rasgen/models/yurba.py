"""Yurba dialog models. Built per request from loosely typed upstream JSON."""

from typing import Any, Optional

from pydantic import BaseModel


def _member_count(value: Any) -> int:
    """Members arrives as int, float or numeric text; anything else counts as 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str):
        try:
            return max(0, int(float(value.strip())))
        except ValueError:
            return 0
    return 0


class DialogInfo(BaseModel):
    total_members: int = 0
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "DialogInfo":
        if not isinstance(payload, dict):
            return cls()
        return cls(total_members=_member_count(payload.get("Members")), name=str(payload.get("Name") or ""))


class DialogMember(BaseModel):
    """One entry of the dialog member list. ``online`` reads Member.Online.Online."""

    id: Optional[str] = None
    name: Optional[str] = None
    online: bool = False
    last_seen: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "DialogMember":
        member = record.get("Member") if isinstance(record, dict) else None
        if not isinstance(member, dict):
            return cls()
        presence = member.get("Online")
        if not isinstance(presence, dict):
            presence = {}
        raw_id = member.get("Id")
        last_seen = presence.get("LastSeen")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            name=member.get("Name") if isinstance(member.get("Name"), str) else None,
            online=presence.get("Online") is True,
            last_seen=str(last_seen) if last_seen is not None else None,
        )


class PresenceSummary(BaseModel):
    online: int
    total: int
    percentage: float
    color: str
