import logging
from typing import Iterable, Iterator, List, Optional

from .assembler import parse_markdown_response
from .models.events import StreamEvent
from .models.records import ParsedResult
from .stream import StreamSession, iter_stream_events
from .synthesis.preview import build_preview_code, build_preview_codes
from .synthesis.strategies import synthesize_definition

logger = logging.getLogger(__name__)


class ComponentParser:
    """
    Main entry point for compgen.
    Parses model responses into component records and builds preview code.
    """

    def __init__(self, fence_aware: Optional[bool] = None):
        """
        Args:
            fence_aware: Ignore ``---`` lines inside code fences when splitting;
                None uses the ``markdown.fence_aware_split`` setting
        """
        self.fence_aware = fence_aware

    def parse(self, text: str) -> ParsedResult:
        """
        Parse a complete or partial model response.

        Raises:
            MarkdownParseError: If the extraction pipeline fails
        """
        return parse_markdown_response(text, self.fence_aware)

    @staticmethod
    def synthesize(code: str) -> str:
        """Standalone definition for a code fragment; never raises."""
        return synthesize_definition(code)

    @staticmethod
    def preview(code: str, preview_blocks: Optional[List[str]] = None) -> List[str]:
        """
        Preview code for a fragment: one entry per preview block, or a single
        entry with the default render call when there are none.
        """
        if preview_blocks:
            return build_preview_codes(code, preview_blocks)
        return [build_preview_code(code)]

    def open_stream(self) -> StreamSession:
        return StreamSession(fence_aware=self.fence_aware)

    def stream_events(self, chunks: Iterable[str], prompt: Optional[str] = None) -> Iterator[StreamEvent]:
        return iter_stream_events(chunks, prompt, self.open_stream())

    @staticmethod
    def load_file(file_path: str) -> str:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError:
            logger.warning("File %s is not valid UTF-8, decoding with replacement characters", file_path)
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
