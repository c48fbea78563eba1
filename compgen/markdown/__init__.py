from .code_blocks import (
    FencedBlock,
    extract_code,
    extract_fenced_blocks,
    extract_preview_blocks,
    filter_render_lines,
)
from .fields import extract_analysis_fields, extract_component_fields, split_list_lines
from .sections import Section, classify_section, iter_sections, split_sections

__all__ = [
    "FencedBlock",
    "Section",
    "classify_section",
    "extract_analysis_fields",
    "extract_code",
    "extract_component_fields",
    "extract_fenced_blocks",
    "extract_preview_blocks",
    "filter_render_lines",
    "iter_sections",
    "split_list_lines",
    "split_sections",
]
