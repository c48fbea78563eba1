"""
Fenced code block extraction.

Fences are recognized line by line: an opening line is three backticks
optionally followed by an allow-listed language tag, a closing line is three
backticks alone. A fence that is never closed produces nothing.
"""
import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

from compgen.core.config import config

from .fields import CODE_LABEL, PREVIEW_CODES_LABEL, MarkerLine, find_label, scan_markers
from .sections import FENCE

logger = logging.getLogger(__name__)

RENDER_CALL = 'render('
COMMENT_PREFIXES = ('//', '/*', '*')
QUOTES = ('"', "'", '`')


class FencedBlock(NamedTuple):
    language: Optional[str]
    content: str
    start: int
    end: int


def _fence_tag(line: str) -> Optional[str]:
    """Language tag of a fence line ('' when untagged), None if not a fence."""
    stripped = line.strip()
    if not stripped.startswith(FENCE):
        return None
    return stripped[len(FENCE):].strip()


def extract_fenced_blocks(text: str, start: int = 0, end: Optional[int] = None,
                          languages: Optional[Iterable[str]] = None) -> List[FencedBlock]:
    """
    Find every closed fence between ``start`` and ``end``.

    Fences tagged with a language outside ``languages`` are skipped whole so
    their closing line is not mistaken for an opening one.

    Args:
        text: Text to scan
        start: Offset where scanning begins
        end: Offset where scanning stops (end of text when None)
        languages: Accepted language tags; defaults to ``markdown.fence_languages``

    Returns:
        Closed fences in document order
    """
    if languages is None:
        languages = config.get('markdown', 'fence_languages', ())
    allowed = set(languages)
    region = text[start:end]
    blocks = []
    offset = start
    opening = None
    foreign = False
    content: List[str] = []
    for line in region.split('\n'):
        line_start = offset
        offset += len(line) + 1
        tag = _fence_tag(line)
        if opening is None:
            if tag is None:
                continue
            opening = line_start
            foreign = bool(tag) and tag not in allowed
            language = tag or None
            content = []
            continue
        if tag == '':
            if foreign:
                logger.debug('Skipping fence with unsupported language %r', language)
            else:
                blocks.append(FencedBlock(language, '\n'.join(content), opening,
                                          min(line_start + len(line), len(text))))
            opening = None
            continue
        content.append(line)
    if opening is not None:
        logger.debug('Unterminated code fence at offset %d', opening)
    return blocks


def _field_end(block: str, markers: List[MarkerLine], label: MarkerLine) -> int:
    """Offset of the first marker line after ``label`` that is outside a fence."""
    for marker in markers:
        if marker.line_start > label.line_start and not marker.in_fence:
            return marker.line_start
    return len(block)


def extract_code(block: str) -> Optional[str]:
    """Content of the first fence in the ``## Code:`` field, trimmed; None if absent or empty."""
    markers = scan_markers(block)
    label = find_label(markers, CODE_LABEL)
    if label is None:
        return None
    fences = extract_fenced_blocks(block, label.value_start, _field_end(block, markers, label))
    if not fences:
        return None
    code = fences[0].content.strip()
    return code or None


def extract_preview_blocks(block: str) -> List[str]:
    """Raw contents of every fence in the ``## Preview Codes:`` field."""
    markers = scan_markers(block)
    label = find_label(markers, PREVIEW_CODES_LABEL)
    if label is None:
        return []
    end = _field_end(block, markers, label)
    return [fence.content for fence in extract_fenced_blocks(block, label.value_start, end)]


def _paren_depth(line: str, depth: int, quote: Optional[str]) -> Tuple[int, Optional[str]]:
    """Update the parenthesis depth for ``line``, ignoring parentheses inside string literals."""
    escaped = False
    opened_at, depth_at_quote = -1, depth
    for index, char in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
            opened_at, depth_at_quote = index, depth
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
    if quote in ('"', "'") and opened_at >= 0:
        # An unclosed quote on a single line is JSX text such as ``Don't``.
        return _paren_depth(line[opened_at + 1:], depth_at_quote, None)
    return depth, quote


def _render_call_end(lines: List[str], first: int) -> int:
    """Index of the last line of a render call starting at ``first``."""
    depth = 0
    quote = None
    for index in range(first, len(lines)):
        depth, quote = _paren_depth(lines[index], depth, quote)
        if depth <= 0 and quote is None:
            return index
    return len(lines) - 1


def filter_render_lines(content: str) -> str:
    """
    Keep the first ``render(...)`` call and comment lines of a preview fence.

    A render call spanning several lines is kept whole, up to the line where
    its parentheses balance. Any other line is dropped.
    """
    lines = content.split('\n')
    kept = []
    rendered = False
    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        if stripped.startswith(RENDER_CALL):
            last = _render_call_end(lines, index)
            if not rendered:
                kept.extend(lines[index:last + 1])
                rendered = True
            index = last + 1
            continue
        if stripped.startswith(COMMENT_PREFIXES):
            kept.append(lines[index])
        index += 1
    return '\n'.join(kept).strip()


def has_render_call(content: str) -> bool:
    return any(line.strip().startswith(RENDER_CALL) for line in content.split('\n'))
