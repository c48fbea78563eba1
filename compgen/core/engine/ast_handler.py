"""
AST Handler for compgen providing a unified interface for tree-sitter operations.
"""
import logging
from functools import lru_cache
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

from compgen.core.engine.languages import LANGUAGES, get_parser
from compgen.core.error_handling import FragmentSyntaxError
from compgen.core.utils.hashing import sha1_code
from compgen.models.span import TextSpan

logger = logging.getLogger(__name__)

class ASTHandler:
    """
    Handles Abstract Syntax Tree operations using tree-sitter.
    Provides parsing, node text/span access and error detection.
    """

    def __init__(self, grammar: str = 'tsx'):
        """
        Initialize the AST handler.

        Args:
            grammar: Grammar name, a key of ``LANGUAGES``
        """
        if grammar not in LANGUAGES:
            raise ValueError(f"Unsupported grammar: {grammar}")
        self.grammar = grammar
        self.parser = get_parser(grammar)

    @lru_cache(maxsize=64)
    def _parse_cached(self, code_hash: str, code: str) -> Tuple[Node, bytes]:
        """Internal cached parse implementation."""
        code_bytes = code.encode("utf8")
        tree = self.parser.parse(code_bytes)
        return (tree.root_node, code_bytes)

    def parse(self, code: str) -> Tuple[Node, bytes]:
        """
        Parse source code into an AST. Results are cached using an LRU cache
        keyed by the SHA1 hash of ``code``.

        Args:
            code: Source code as string

        Returns:
            Tuple of (root_node, code_bytes)
        """
        code_hash = sha1_code(code)
        return self._parse_cached(code_hash, code)

    def parse_strict(self, code: str) -> Tuple[Node, bytes]:
        """
        Parse source code and reject trees containing syntax errors.

        tree-sitter recovers from any input, so a tree with ERROR or MISSING
        nodes is the signal that the fragment is not valid source.

        Raises:
            FragmentSyntaxError: If the tree contains an error node
        """
        root, code_bytes = self.parse(code)
        if root.has_error:
            error_node = self.find_first_error(root)
            line, column = (None, None)
            snippet = None
            if error_node is not None:
                line, column = error_node.start_point[0] + 1, error_node.start_point[1]
                snippet = self.get_node_text(error_node, code_bytes)[:80]
            raise FragmentSyntaxError('Syntax error in code fragment', self.grammar,
                                      line=line, column=column, code_snippet=snippet)
        return root, code_bytes

    def get_node_text(self, node: Node, code_bytes: bytes) -> str:
        """
        Get the text content of a node.

        Args:
            node: Tree-sitter node
            code_bytes: Source code as bytes

        Returns:
            String content of the node
        """
        return code_bytes[node.start_byte:node.end_byte].decode('utf8')

    def get_node_span(self, node: Node) -> TextSpan:
        """Byte span covered by ``node``."""
        return TextSpan(start=node.start_byte, end=node.end_byte)

    def code_children(self, node: Node) -> List[Node]:
        """Named children of ``node`` with comments left out."""
        return [child for child in node.named_children if child.type != 'comment']

    def unwrap_parentheses(self, node: Node) -> Node:
        """Strip any number of enclosing parentheses around a single expression."""
        while node.type == 'parenthesized_expression':
            inner = self.code_children(node)
            if len(inner) != 1:
                break
            node = inner[0]
        return node

    def find_first_error(self, root: Node) -> Optional[Node]:
        """Return the first ERROR or MISSING node in document order."""
        for node in self.walk(root):
            if node.type == 'ERROR' or node.is_missing:
                return node
        return None

    def walk(self, root: Node) -> Iterator[Node]:
        """Pre-order traversal that does not recurse on the Python stack."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
