from .enums import BlockKind, StreamEventType, StreamState
from .events import StreamEvent
from .records import AnalysisRecord, ComponentCategory, ComponentRecord, ParsedResult
from .span import TextSpan

__all__ = [
    "AnalysisRecord",
    "BlockKind",
    "ComponentCategory",
    "ComponentRecord",
    "ParsedResult",
    "StreamEvent",
    "StreamEventType",
    "StreamState",
    "TextSpan",
]
