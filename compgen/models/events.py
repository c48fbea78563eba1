from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .enums import StreamEventType
from .records import ParsedResult


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class StreamEvent(BaseModel):
    """Payload handed to the transport layer for one step of a stream"""
    type: StreamEventType
    data: Optional[ParsedResult] = None
    message: Optional[str] = None
    prompt: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None
    timestamp: str = Field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
