"""
Section splitting for model responses.

A response is a sequence of blocks separated by a line that is exactly
``---``. Each block is classified by its first level-one header.
"""
import logging
from typing import Iterator, List, NamedTuple, Optional

from compgen.core.config import config
from compgen.models.enums import BlockKind

logger = logging.getLogger(__name__)

SEPARATOR = '---'
FENCE = '```'
COMPONENT_HEADER = '# Component:'
ANALYSIS_HEADER = '# Analysis:'


class Section(NamedTuple):
    kind: BlockKind
    text: str


def normalize_newlines(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\r', '\n')


def _split_plain(text: str) -> List[str]:
    return text.split(f'\n{SEPARATOR}\n')


def _split_fence_aware(text: str) -> List[str]:
    """Split on separator lines that are not inside an open code fence."""
    parts = []
    current: List[str] = []
    in_fence = False
    lines = text.split('\n')
    for index, line in enumerate(lines):
        if line.strip().startswith(FENCE):
            in_fence = not in_fence
        # A separator needs a newline on both sides, so never the first or last line.
        is_separator = (line == SEPARATOR and not in_fence
                        and 0 < index < len(lines) - 1)
        if is_separator:
            parts.append('\n'.join(current))
            current = []
        else:
            current.append(line)
    parts.append('\n'.join(current))
    return parts


def split_sections(text: str, fence_aware: Optional[bool] = None) -> List[str]:
    """
    Partition ``text`` into trimmed, non-empty blocks.

    Args:
        text: The whole accumulated response
        fence_aware: Ignore separators inside code fences; defaults to the
            ``markdown.fence_aware_split`` setting

    Returns:
        Blocks in document order
    """
    if fence_aware is None:
        fence_aware = config.get('markdown', 'fence_aware_split', False)
    text = normalize_newlines(text)
    raw = _split_fence_aware(text) if fence_aware else _split_plain(text)
    blocks = [block.strip() for block in raw]
    return [block for block in blocks if block]


def classify_section(block: str) -> BlockKind:
    """Classify a block by its first level-one header line."""
    for line in block.split('\n'):
        stripped = line.strip()
        if not stripped.startswith('# '):
            continue
        if stripped.startswith(COMPONENT_HEADER):
            return BlockKind.COMPONENT
        if stripped.startswith(ANALYSIS_HEADER):
            return BlockKind.ANALYSIS
        return BlockKind.UNCLASSIFIED
    return BlockKind.UNCLASSIFIED


def iter_sections(text: str, fence_aware: Optional[bool] = None) -> Iterator[Section]:
    for block in split_sections(text, fence_aware):
        kind = classify_section(block)
        if kind is BlockKind.UNCLASSIFIED:
            logger.debug('Skipping unclassified block starting with %r', block[:40])
        yield Section(kind, block)
