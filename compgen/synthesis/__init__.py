from .extractor import ComponentDefinitionExtractor
from .nodes import ComponentDefinition
from .preview import build_preview_code, build_preview_codes, build_previews, render_call
from .strategies import SynthesizedDefinition, synthesize, synthesize_definition

__all__ = [
    "ComponentDefinition",
    "ComponentDefinitionExtractor",
    "SynthesizedDefinition",
    "build_preview_code",
    "build_preview_codes",
    "build_previews",
    "render_call",
    "synthesize",
    "synthesize_definition",
]
