"""
Field extraction for component and analysis blocks.

A block is tokenized into marker lines (every line starting with ``##``),
and each field is the text between its label and a bounded terminator:
end of line for scalars, the next ``## Code:`` line for documentation and the
next marker line for analysis lists.
"""
import logging
import re
from typing import Any, Dict, List, NamedTuple, Optional

from .sections import FENCE

logger = logging.getLogger(__name__)

MARKER = '##'
_LABEL_RE = re.compile(r'## ([A-Za-z][A-Za-z ]*):(.*)')
_BULLET_RE = re.compile(r'^[-*]\s*')

COMPONENT_SCALARS = {
    'id': 'ID',
    'name': 'Name',
    'category': 'Category',
    'description': 'Description',
}
DOCUMENTATION_LABEL = 'Documentation'
CODE_LABEL = 'Code'
PREVIEW_CODES_LABEL = 'Preview Codes'

ANALYSIS_SCALARS = {
    'summary': 'Summary',
    'estimated_complexity': 'Estimated Complexity',
}
ANALYSIS_LISTS = {
    'technical_requirements': 'Technical Requirements',
    'design_patterns': 'Design Patterns',
    'recommendations': 'Recommendations',
    'dependencies': 'Dependencies',
}
CATEGORIES_LABEL = 'Component Categories'


class MarkerLine(NamedTuple):
    """A line starting with ``##``; ``label`` is None when it is not ``## Label:``."""
    label: Optional[str]
    value: str
    line_start: int
    value_start: int
    line_end: int
    in_fence: bool


def scan_markers(block: str) -> List[MarkerLine]:
    """Tokenize ``block`` into its marker lines, tracking code fence state."""
    markers = []
    in_fence = False
    offset = 0
    for line in block.split('\n'):
        line_start = offset
        offset += len(line) + 1
        if line.strip().startswith(FENCE):
            in_fence = not in_fence
            continue
        if not line.startswith(MARKER):
            continue
        line_end = line_start + len(line)
        match = _LABEL_RE.match(line)
        if match:
            label = match.group(1).strip()
            markers.append(MarkerLine(label, match.group(2), line_start,
                                      line_start + match.start(2), line_end, in_fence))
        else:
            markers.append(MarkerLine(None, '', line_start, line_end, line_end, in_fence))
    return markers


def find_label(markers: List[MarkerLine], label: str, include_fenced: bool = False) -> Optional[MarkerLine]:
    for marker in markers:
        if marker.label == label and (include_fenced or not marker.in_fence):
            return marker
    return None


def scalar_value(markers: List[MarkerLine], label: str) -> Optional[str]:
    marker = find_label(markers, label)
    if marker is None:
        return None
    value = marker.value.strip()
    return value or None


def split_list_lines(body: str) -> List[str]:
    """Split a multi-line field body into items, dropping blanks and bullets."""
    items = []
    for line in body.split('\n'):
        if not line.strip():
            continue
        item = _BULLET_RE.sub('', line.strip()).strip()
        if item:
            items.append(item)
    return items


def _documentation(block: str, markers: List[MarkerLine]) -> Optional[str]:
    doc = find_label(markers, DOCUMENTATION_LABEL)
    if doc is None:
        return None
    end = len(block)
    for marker in markers:
        # Fence state is ignored for the terminator.
        if marker.line_start > doc.line_start and marker.label == CODE_LABEL:
            end = marker.line_start
            break
    value = block[doc.value_start:end].strip()
    return value or None


def _multiline_body(block: str, markers: List[MarkerLine], label: str) -> Optional[str]:
    start_marker = find_label(markers, label, include_fenced=True)
    if start_marker is None:
        return None
    end = len(block)
    for marker in markers:
        if marker.line_start > start_marker.line_start:
            end = marker.line_start
            break
    return block[start_marker.value_start:end]


def extract_component_fields(block: str) -> Dict[str, Any]:
    """
    Extract the scalar and documentation fields of a component block.

    Returns:
        Mapping of found fields; absent or empty fields are left out
    """
    markers = scan_markers(block)
    fields: Dict[str, Any] = {}
    for key, label in COMPONENT_SCALARS.items():
        value = scalar_value(markers, label)
        if value is not None:
            fields[key] = value
    documentation = _documentation(block, markers)
    if documentation is not None:
        fields['documentation'] = documentation
    return fields


def parse_categories(body: str) -> List[Dict[str, Any]]:
    categories = []
    for item in split_list_lines(body):
        if ':' not in item:
            continue
        category, description = item.split(':', 1)
        categories.append({'category': category.strip(), 'description': description.strip(), 'components': []})
    return categories


def extract_analysis_fields(block: str) -> Dict[str, Any]:
    """
    Extract the fields of an analysis block.

    Returns:
        Mapping of found fields; list fields are present (possibly empty) once
        their label has been seen
    """
    markers = scan_markers(block)
    fields: Dict[str, Any] = {}
    for key, label in ANALYSIS_SCALARS.items():
        value = scalar_value(markers, label)
        if value is not None:
            fields[key] = value
    categories = _multiline_body(block, markers, CATEGORIES_LABEL)
    if categories is not None:
        fields['component_categories'] = parse_categories(categories)
    for key, label in ANALYSIS_LISTS.items():
        body = _multiline_body(block, markers, label)
        if body is not None:
            fields[key] = split_list_lines(body)
    return fields
