"""
Syntax node variants the synthesizer understands.

Only a closed set of shapes matters for re-emitting a component: two kinds
of definition, two kinds of body and two kinds of parameter. Statements and
the returned expression are kept as byte spans into the original source and
are only turned into text when the definition is rendered.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from compgen.models.span import TextSpan

NULL_EXPRESSION = 'null'


@dataclass
class IdentifierParam:
    name: str

    def render(self) -> str:
        return self.name


@dataclass
class DestructuredParam:
    keys: List[str] = field(default_factory=list)

    def render(self) -> str:
        if not self.keys:
            return '{}'
        return '{ ' + ', '.join(self.keys) + ' }'


Param = Union[IdentifierParam, DestructuredParam]


@dataclass
class ReturnStatement:
    argument: Optional[TextSpan] = None


@dataclass
class BlockBody:
    statements: List[TextSpan] = field(default_factory=list)
    return_statement: Optional[ReturnStatement] = None


@dataclass
class ExpressionBody:
    expression: TextSpan


Body = Union[BlockBody, ExpressionBody]


@dataclass
class FunctionDeclarationDef:
    name: str
    params: List[Param]
    body: Body


@dataclass
class ArrowBindingDef:
    name: str
    params: List[Param]
    body: Body


Definition = Union[FunctionDeclarationDef, ArrowBindingDef]


@dataclass
class ComponentDefinition:
    """A component definition ready to be emitted as a standalone function."""
    name: str
    params: List[Param]
    statements: List[TextSpan]
    return_expression: Optional[TextSpan]
    source: bytes

    @classmethod
    def from_definition(cls, definition: Definition, source: bytes) -> 'ComponentDefinition':
        body = definition.body
        if isinstance(body, ExpressionBody):
            statements: List[TextSpan] = []
            returned = body.expression
        elif isinstance(body, BlockBody):
            statements = list(body.statements)
            returned = body.return_statement.argument if body.return_statement else None
        else:
            raise TypeError(f'Unsupported body variant: {type(body).__name__}')
        return cls(definition.name, list(definition.params), statements, returned, source)

    @property
    def parameter_list(self) -> str:
        return ', '.join(param.render() for param in self.params)

    @property
    def return_text(self) -> str:
        if self.return_expression is None:
            return NULL_EXPRESSION
        return self.return_expression.slice(self.source)

    def statement_texts(self) -> List[str]:
        return [span.slice(self.source) for span in self.statements]

    def render(self) -> str:
        lines = [f'function {self.name}({self.parameter_list}) {{']
        statements = self.statement_texts()
        if statements:
            lines.append('  ' + '\n  '.join(statements))
            lines.append('')
        lines.append(f'  return {self.return_text};')
        lines.append('}')
        return '\n'.join(lines)
