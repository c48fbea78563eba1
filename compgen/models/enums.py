"""
Enumerations shared by the markdown parser and the stream session.
"""
from enum import Enum

class BlockKind(str, Enum):
    """Kinds of top-level blocks in a model response"""
    COMPONENT = 'component'
    ANALYSIS = 'analysis'
    UNCLASSIFIED = 'unclassified'

class StreamState(str, Enum):
    """Progress of a stream session as seen by its caller"""
    ACCUMULATING = 'accumulating'
    PARTIAL = 'partial'
    COMPLETE = 'complete'

class StreamEventType(str, Enum):
    """Events a stream session hands to the transport layer"""
    START = 'start'
    CHUNK = 'chunk'
    DONE = 'done'
    ERROR = 'error'
