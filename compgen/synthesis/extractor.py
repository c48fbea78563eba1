# -*- coding: utf-8 -*-
"""
Structural extraction of a component definition from a code fragment.
"""
import logging
from typing import List, Optional

from tree_sitter import Node

from compgen.core.config import config
from compgen.core.engine.ast_handler import ASTHandler
from compgen.core.error_handling import ElementNotFoundError

from .nodes import (
    ArrowBindingDef,
    BlockBody,
    Body,
    ComponentDefinition,
    Definition,
    DestructuredParam,
    ExpressionBody,
    FunctionDeclarationDef,
    IdentifierParam,
    Param,
    ReturnStatement,
)

logger = logging.getLogger(__name__)

FUNCTION_EXPRESSION_TYPES = ('function_expression', 'function')
VARIABLE_DECLARATION_TYPES = ('lexical_declaration', 'variable_declaration')
PARAMETER_TYPES = ('required_parameter', 'optional_parameter')


class ComponentDefinitionExtractor:
    """ Finds the top-level component definition of a fragment and records its parts as spans. """

    def __init__(self, ast_handler: Optional[ASTHandler] = None):
        self.ast_handler = ast_handler or ASTHandler(config.get('synthesis', 'grammar', 'tsx'))

    def extract(self, code: str) -> ComponentDefinition:
        """
        Parse ``code`` and return its component definition.

        Raises:
            FragmentSyntaxError: If the fragment does not parse cleanly
            ElementNotFoundError: If no top-level definition exists
        """
        root, code_bytes = self.ast_handler.parse_strict(code)
        candidates = self.find_definitions(root, code_bytes)
        if not candidates:
            raise ElementNotFoundError('component_definition', statements=root.named_child_count)
        definition = self.choose_definition(candidates)
        logger.debug("Extracted component '%s' (%s) from %d candidate(s)",
                     definition.name, type(definition).__name__, len(candidates))
        return ComponentDefinition.from_definition(definition, code_bytes)

    def find_definitions(self, root: Node, code_bytes: bytes) -> List[Definition]:
        """Collect program-level definitions in document order."""
        definitions: List[Definition] = []
        for statement in self.ast_handler.code_children(root):
            node = statement
            if node.type == 'export_statement':
                declaration = node.child_by_field_name('declaration')
                if declaration is None:
                    value = node.child_by_field_name('value')
                    definition = self._definition_from_default_export(value, code_bytes)
                    if definition is not None:
                        definitions.append(definition)
                    continue
                node = declaration
            if node.type == 'function_declaration':
                definitions.append(self._definition_from_function(node, code_bytes))
            elif node.type in VARIABLE_DECLARATION_TYPES:
                definitions.extend(self._definitions_from_declaration(node, code_bytes))
        return definitions

    @staticmethod
    def choose_definition(candidates: List[Definition]) -> Definition:
        """The last capitalized definition wins, otherwise the last one."""
        for definition in reversed(candidates):
            if definition.name[:1].isupper():
                return definition
        return candidates[-1]

    def _default_name(self) -> str:
        return config.get('synthesis', 'default_component_name', 'Component')

    def _definition_from_function(self, node: Node, code_bytes: bytes, name: Optional[str] = None) -> FunctionDeclarationDef:
        name_node = node.child_by_field_name('name')
        if name_node is not None:
            name = self.ast_handler.get_node_text(name_node, code_bytes)
        return FunctionDeclarationDef(
            name=name or self._default_name(),
            params=self.extract_params(node, code_bytes),
            body=self.extract_body(node.child_by_field_name('body')),
        )

    def _definitions_from_declaration(self, node: Node, code_bytes: bytes) -> List[ArrowBindingDef]:
        definitions = []
        for declarator in node.named_children:
            if declarator.type != 'variable_declarator':
                continue
            name_node = declarator.child_by_field_name('name')
            arrow = self._arrow_initializer(declarator.child_by_field_name('value'))
            if name_node is None or name_node.type != 'identifier' or arrow is None:
                continue
            definitions.append(ArrowBindingDef(
                name=self.ast_handler.get_node_text(name_node, code_bytes),
                params=self.extract_params(arrow, code_bytes),
                body=self.extract_body(arrow.child_by_field_name('body')),
            ))
        return definitions

    def _definition_from_default_export(self, value: Optional[Node], code_bytes: bytes) -> Optional[Definition]:
        if value is None:
            return None
        value = self.ast_handler.unwrap_parentheses(value)
        if value.type in FUNCTION_EXPRESSION_TYPES:
            return self._definition_from_function(value, code_bytes)
        arrow = self._arrow_initializer(value)
        if arrow is None:
            return None
        return ArrowBindingDef(
            name=self._default_name(),
            params=self.extract_params(arrow, code_bytes),
            body=self.extract_body(arrow.child_by_field_name('body')),
        )

    def _arrow_initializer(self, value: Optional[Node]) -> Optional[Node]:
        """The arrow function bound by an initializer, looking through one wrapping call such as ``memo(...)``."""
        if value is None:
            return None
        value = self.ast_handler.unwrap_parentheses(value)
        if value.type == 'arrow_function':
            return value
        if value.type == 'call_expression':
            arguments = value.child_by_field_name('arguments')
            args = self.ast_handler.code_children(arguments) if arguments is not None else []
            if args:
                first = self.ast_handler.unwrap_parentheses(args[0])
                if first.type == 'arrow_function':
                    return first
        return None

    def extract_params(self, function_node: Node, code_bytes: bytes) -> List[Param]:
        single = function_node.child_by_field_name('parameter')
        if single is not None:
            param = self._param_from_pattern(single, code_bytes)
            return [param] if param is not None else []
        params_node = function_node.child_by_field_name('parameters')
        if params_node is None:
            return []
        params = []
        for child in self.ast_handler.code_children(params_node):
            pattern = child
            if child.type in PARAMETER_TYPES:
                pattern = child.child_by_field_name('pattern')
            if pattern is None:
                continue
            param = self._param_from_pattern(pattern, code_bytes)
            if param is not None:
                params.append(param)
            else:
                logger.debug('Dropping unsupported parameter of type %s', pattern.type)
        return params

    def _param_from_pattern(self, pattern: Node, code_bytes: bytes) -> Optional[Param]:
        if pattern.type == 'identifier':
            return IdentifierParam(self.ast_handler.get_node_text(pattern, code_bytes))
        if pattern.type == 'object_pattern':
            return DestructuredParam(self.destructured_keys(pattern, code_bytes))
        return None

    def destructured_keys(self, pattern: Node, code_bytes: bytes) -> List[str]:
        """Top-level key names of an object pattern; nested patterns, defaults and renames are dropped."""
        keys = []
        for prop in self.ast_handler.code_children(pattern):
            key_node = None
            if prop.type == 'shorthand_property_identifier_pattern':
                key_node = prop
            elif prop.type == 'object_assignment_pattern':
                key_node = prop.child_by_field_name('left')
            elif prop.type == 'pair_pattern':
                key_node = prop.child_by_field_name('key')
                if key_node is not None and key_node.type == 'computed_property_name':
                    inner = self.ast_handler.code_children(key_node)
                    key_node = inner[0] if inner else None
            if key_node is None:
                continue
            if key_node.type in ('shorthand_property_identifier_pattern', 'property_identifier', 'identifier'):
                keys.append(self.ast_handler.get_node_text(key_node, code_bytes))
        return keys

    def extract_body(self, body: Optional[Node]) -> Body:
        if body is None:
            return BlockBody()
        if body.type != 'statement_block':
            return ExpressionBody(self.ast_handler.get_node_span(self.ast_handler.unwrap_parentheses(body)))
        block = BlockBody()
        for statement in self.ast_handler.code_children(body):
            if statement.type == 'return_statement':
                returned = self._return_statement(statement)
                # A bare ``return;`` does not replace an earlier returned expression.
                if returned.argument is not None or block.return_statement is None:
                    block.return_statement = returned
            else:
                block.statements.append(self.ast_handler.get_node_span(statement))
        return block

    def _return_statement(self, statement: Node) -> ReturnStatement:
        children = self.ast_handler.code_children(statement)
        if not children:
            return ReturnStatement()
        argument = self.ast_handler.unwrap_parentheses(children[0])
        return ReturnStatement(self.ast_handler.get_node_span(argument))
