"""
Records extracted from a model response.
Attributes are snake_case; the interchange form produced by ``to_dict`` uses
camelCase keys and omits fields that were not found.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = {'populate_by_name': True, 'alias_generator': to_camel}


class ComponentRecord(BaseModel):
    """One generated UI component"""
    id: str
    name: str
    category: Optional[str] = None
    description: Optional[str] = None
    documentation: Optional[str] = None
    code: Optional[str] = None
    preview_code: Optional[str] = None
    preview_codes: Optional[List[str]] = None
    model_config = _MODEL_CONFIG


class ComponentCategory(BaseModel):
    category: str
    description: str = ''
    components: List[str] = Field(default_factory=list)
    model_config = _MODEL_CONFIG


class AnalysisRecord(BaseModel):
    """The model's assessment of the overall request"""
    summary: Optional[str] = None
    component_categories: Optional[List[ComponentCategory]] = None
    technical_requirements: Optional[List[str]] = None
    design_patterns: Optional[List[str]] = None
    estimated_complexity: Optional[str] = None
    recommendations: Optional[List[str]] = None
    dependencies: Optional[List[str]] = None
    model_config = _MODEL_CONFIG

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


class ParsedResult(BaseModel):
    """Projection of the text accumulated so far; rebuilt on every parse"""
    components: List[ComponentRecord] = Field(default_factory=list)
    analysis: AnalysisRecord = Field(default_factory=AnalysisRecord)
    model_config = _MODEL_CONFIG

    @property
    def component_ids(self) -> List[str]:
        return [component.id for component in self.components]

    @property
    def has_analysis(self) -> bool:
        return not self.analysis.is_empty

    def get_component(self, component_id: str) -> Optional[ComponentRecord]:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
