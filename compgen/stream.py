"""
Stream session: the caller loop around the record assembler.

A session owns the accumulated buffer of one generation request. After every
chunk it reparses the whole buffer; a parse failure mid-stream only means the
text is not parseable yet, so the last good result is kept and the session
waits for more text. Only ``finish`` can fail hard.
"""
import logging
from typing import Iterable, Iterator, Optional

from compgen.assembler import parse_markdown_response
from compgen.core.config import config
from compgen.core.error_handling import CompgenError, MarkdownParseError, TerminalParseError
from compgen.core.fallback import log_error
from compgen.core.utils.hashing import sha1_json
from compgen.models.enums import StreamEventType, StreamState
from compgen.models.events import StreamEvent
from compgen.models.records import ParsedResult

logger = logging.getLogger(__name__)


class StreamSession:
    """
    Accumulates chunks of one model response and tracks the last usable result.

    Attributes:
        buffer: Text received so far
        last_result: Most recent result with at least one component
        state: ACCUMULATING until a component appears, PARTIAL afterwards and
            COMPLETE once the stream ended with an analysis block present
    """

    def __init__(self, fence_aware: Optional[bool] = None, suppress_duplicates: Optional[bool] = None):
        self.fence_aware = fence_aware
        if suppress_duplicates is None:
            suppress_duplicates = config.get('stream', 'suppress_duplicates', True)
        self.suppress_duplicates = suppress_duplicates
        self.buffer = ''
        self.last_result: Optional[ParsedResult] = None
        self.state = StreamState.ACCUMULATING
        self.finished = False
        self.chunk_count = 0
        self.failed_parses = 0
        self._last_digest: Optional[str] = None

    def start(self, prompt: Optional[str] = None) -> StreamEvent:
        return StreamEvent(type=StreamEventType.START, message='Started processing user requirements', prompt=prompt)

    def _try_parse(self) -> Optional[ParsedResult]:
        try:
            return parse_markdown_response(self.buffer, self.fence_aware)
        except MarkdownParseError as e:
            self.failed_parses += 1
            log_error('Buffer not parseable yet', e, logging.DEBUG, False, logger)
            return None

    def feed(self, chunk: str) -> Optional[StreamEvent]:
        """
        Append ``chunk`` and reparse the buffer.

        Returns:
            A chunk event when a new result with components is available,
            otherwise None
        """
        if self.finished:
            raise CompgenError('Cannot feed a finished stream session', chunk_count=self.chunk_count)
        if not chunk:
            return None
        self.buffer += chunk
        self.chunk_count += 1
        result = self._try_parse()
        if result is None or not result.components:
            return None
        self.last_result = result
        self.state = StreamState.PARTIAL
        digest = sha1_json(result.to_dict())
        if self.suppress_duplicates and digest == self._last_digest:
            return None
        self._last_digest = digest
        return StreamEvent(type=StreamEventType.CHUNK, data=result)

    def finish(self) -> StreamEvent:
        """
        Mark the stream as ended and produce the final result.

        Raises:
            TerminalParseError: If no result with components was ever produced
        """
        self.finished = True
        result = self._try_parse()
        if result is not None and result.components:
            self.last_result = result
        if self.last_result is None:
            reason = 'no components found' if self.failed_parses == 0 else 'buffer could not be parsed'
            raise TerminalParseError(reason, buffer_length=len(self.buffer))
        self.state = StreamState.COMPLETE if self.last_result.has_analysis else StreamState.PARTIAL
        logger.info('Stream finished with %d component(s), state=%s',
                    len(self.last_result.components), self.state.value)
        return StreamEvent(type=StreamEventType.DONE, data=self.last_result)

    @property
    def is_complete(self) -> bool:
        return self.state is StreamState.COMPLETE


def iter_stream_events(chunks: Iterable[str], prompt: Optional[str] = None,
                       session: Optional[StreamSession] = None) -> Iterator[StreamEvent]:
    """
    Drive a session over ``chunks``, yielding start, chunk and done events.

    A terminal failure is turned into a single error event.
    """
    session = session or StreamSession()
    yield session.start(prompt)
    for chunk in chunks:
        event = session.feed(chunk)
        if event is not None:
            yield event
    try:
        yield session.finish()
    except TerminalParseError as e:
        log_error('Stream failed', e, logging.ERROR, False, logger)
        yield StreamEvent(type=StreamEventType.ERROR, error='Markdown format parsing failed', details=str(e))
