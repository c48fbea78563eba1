"""
Synthesis strategies for standalone component definitions.

Strategies are tried strongest first:

1. ``structural_strategy`` parses the fragment and re-emits its top-level
   component with the returned expression copied verbatim.
2. ``pattern_strategy`` wraps the first JSX element found in the raw text.
3. ``placeholder_strategy`` returns a fixed definition and cannot fail.

``synthesize`` runs them through ``first_success`` and therefore never raises.
"""
import logging
from typing import NamedTuple, Optional

from compgen.core.config import config
from compgen.core.error_handling import PatternNotFoundError
from compgen.core.fallback import first_success

from .extractor import ComponentDefinitionExtractor

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = 'Component'
PLACEHOLDER_DEFINITION = (
    'function Component() {\n'
    '  return <div>Component preview unavailable</div>;\n'
    '}'
)


class SynthesizedDefinition(NamedTuple):
    name: str
    source: str
    strategy: str


_extractor = None


def get_extractor() -> ComponentDefinitionExtractor:
    global _extractor
    if _extractor is None:
        _extractor = ComponentDefinitionExtractor()
    return _extractor


def structural_strategy(code: str) -> SynthesizedDefinition:
    definition = get_extractor().extract(code)
    return SynthesizedDefinition(definition.name, definition.render(), 'structural')


def find_jsx_element(code: str) -> Optional[str]:
    r"""
    First JSX-looking element in ``code``.

    Matches what ``<[^>]*>[\s\S]*</[^>]*>|<[^>]*/>`` finds with a leftmost
    search: from the first ``<`` that opens a tag, either everything up to the
    last closing tag or a self-closing tag.
    """
    last_gt = code.rfind('>')
    close_start = code.rfind('</', 0, last_gt) if last_gt != -1 else -1
    close_end = code.find('>', close_start) + 1 if close_start != -1 else -1
    start = code.find('<')
    tag_end = -1
    while start != -1:
        if tag_end < start:
            tag_end = code.find('>', start)
            if tag_end == -1:
                return None
        if close_start > tag_end:
            return code[start:close_end]
        if tag_end - 1 > start and code[tag_end - 1] == '/':
            return code[start:tag_end + 1]
        start = code.find('<', start + 1)
    return None


def pattern_strategy(code: str) -> SynthesizedDefinition:
    element = find_jsx_element(code)
    if element is None:
        raise PatternNotFoundError('jsx_element', code_length=len(code))
    name = config.get('synthesis', 'default_component_name', PLACEHOLDER_NAME)
    source = f'function {name}() {{\n  return {element};\n}}'
    return SynthesizedDefinition(name, source, 'pattern')


def placeholder_strategy(code: str) -> SynthesizedDefinition:
    return SynthesizedDefinition(PLACEHOLDER_NAME, PLACEHOLDER_DEFINITION, 'placeholder')


synthesize = first_success([structural_strategy, pattern_strategy], placeholder_strategy, log=logger)


def synthesize_definition(code: str) -> str:
    """
    Build a self-contained component definition from a code fragment.

    Args:
        code: Arbitrary text, normally one component written as a function
            declaration or an arrow function bound to a variable

    Returns:
        Source of a ``function <Name>(...) {...}`` definition; never raises
    """
    return synthesize(code).source
