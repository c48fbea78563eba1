"""
Preview code: a synthesized definition followed by one render call, ready
for a sandboxed evaluator.
"""
from typing import List, Optional, Sequence, Tuple

from compgen.markdown.code_blocks import filter_render_lines, has_render_call

from .strategies import SynthesizedDefinition, synthesize


def render_call(name: str) -> str:
    return f'render(<{name} />)'


def combine(definition: SynthesizedDefinition, render_lines: Optional[str] = None) -> str:
    """Join a definition with render lines, adding a default render call if there is none."""
    render_lines = (render_lines or '').strip()
    if not has_render_call(render_lines):
        render_lines = '\n'.join(filter(None, [render_lines, render_call(definition.name)]))
    return f'{definition.source}\n\n{render_lines}'


def build_preview_code(code: str) -> str:
    return combine(synthesize(code))


def build_preview_codes(code: str, preview_blocks: Sequence[str]) -> List[str]:
    definition = synthesize(code)
    return [combine(definition, filter_render_lines(block)) for block in preview_blocks]


def build_previews(code: str, preview_blocks: Sequence[str]) -> Tuple[str, Optional[List[str]]]:
    """
    Preview code for a component plus one preview per preview fence.

    The fragment is synthesized once and shared by every preview.

    Returns:
        Tuple of (preview_code, preview_codes); preview_codes is None when
        there are no preview fences
    """
    definition = synthesize(code)
    preview_code = combine(definition)
    if not preview_blocks:
        return preview_code, None
    return preview_code, [combine(definition, filter_render_lines(block)) for block in preview_blocks]
