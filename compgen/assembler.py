"""
Incremental record assembly.

``parse_markdown_response`` turns the whole response accumulated so far into
a ``ParsedResult``. It keeps no state between calls: every call re-splits the
buffer, re-extracts every field and re-synthesizes every preview, so callers
can simply invoke it again after appending a chunk.
"""
import logging
from typing import Any, Dict, Optional

from compgen.core.error_handling import MarkdownParseError
from compgen.markdown.code_blocks import extract_code, extract_preview_blocks
from compgen.markdown.fields import extract_analysis_fields, extract_component_fields
from compgen.markdown.sections import iter_sections
from compgen.models.enums import BlockKind
from compgen.models.records import AnalysisRecord, ComponentRecord, ParsedResult
from compgen.synthesis.preview import build_previews

logger = logging.getLogger(__name__)


def assemble_component(block: str) -> Optional[ComponentRecord]:
    """
    Build the record for one component block.

    Returns:
        The record, or None while ``id`` or ``name`` is still missing
    """
    fields: Dict[str, Any] = extract_component_fields(block)
    if not fields.get('id') or not fields.get('name'):
        return None
    code = extract_code(block)
    if code:
        fields['code'] = code
        fields['preview_code'], preview_codes = build_previews(code, extract_preview_blocks(block))
        if preview_codes is not None:
            fields['preview_codes'] = preview_codes
    return ComponentRecord(**fields)


def assemble_analysis(block: str, analysis: Optional[AnalysisRecord] = None) -> AnalysisRecord:
    """Merge the fields of ``block`` into ``analysis``; later blocks win per field."""
    fields = extract_analysis_fields(block)
    if analysis is None:
        return AnalysisRecord(**fields)
    return AnalysisRecord(**{**analysis.model_dump(exclude_none=True), **fields})


def _build_result(text: str, fence_aware: Optional[bool]) -> ParsedResult:
    result = ParsedResult()
    analysis = AnalysisRecord()
    for section in iter_sections(text, fence_aware):
        if section.kind is BlockKind.COMPONENT:
            component = assemble_component(section.text)
            if component is not None:
                result.components.append(component)
        elif section.kind is BlockKind.ANALYSIS:
            analysis = assemble_analysis(section.text, analysis)
    result.analysis = analysis
    return result


def parse_markdown_response(text: str, fence_aware: Optional[bool] = None) -> ParsedResult:
    """
    Parse the accumulated model response.

    Args:
        text: Everything received so far
        fence_aware: Passed to the section splitter; None uses the configured default

    Returns:
        A freshly built ParsedResult

    Raises:
        MarkdownParseError: If the extraction pipeline fails unexpectedly
    """
    try:
        result = _build_result(text, fence_aware)
    except Exception as e:
        raise MarkdownParseError(buffer_length=len(text) if isinstance(text, str) else None) from e
    logger.debug('Parsed %d component(s) from %d characters', len(result.components), len(text))
    return result
