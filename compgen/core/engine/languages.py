"""
Tree-sitter grammars available to compgen.

Component fragments are TypeScript with JSX, so the TSX grammar is the
default; the plain TypeScript grammar is kept for fragments that use angle
bracket type assertions, which TSX rejects.
"""
import logging
from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)

LANGUAGES = {
    'tsx': Language(tree_sitter_typescript.language_tsx()),
    'typescript': Language(tree_sitter_typescript.language_typescript()),
}


@lru_cache(maxsize=None)
def get_parser(grammar: str) -> Parser:
    """Return a parser for ``grammar``; raises KeyError for unknown grammars."""
    language = LANGUAGES[grammar]
    logger.debug("Creating tree-sitter parser for grammar '%s'", grammar)
    return Parser(language)
