from .assembler import parse_markdown_response
from .main import ComponentParser
from .models import (
    AnalysisRecord,
    BlockKind,
    ComponentCategory,
    ComponentRecord,
    ParsedResult,
    StreamEvent,
    StreamEventType,
    StreamState,
)
from .stream import StreamSession, iter_stream_events
from .synthesis import synthesize_definition

__version__ = "0.1.0"
__all__ = [
    "AnalysisRecord",
    "BlockKind",
    "ComponentCategory",
    "ComponentParser",
    "ComponentRecord",
    "ParsedResult",
    "StreamEvent",
    "StreamEventType",
    "StreamSession",
    "StreamState",
    "iter_stream_events",
    "parse_markdown_response",
    "synthesize_definition",
]
