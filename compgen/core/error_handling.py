"""
Error handling for compgen.

This module provides the exception hierarchy used throughout compgen. Every
exception carries optional keyword context which is rendered by ``__str__``
so log lines show where a failure happened without extra formatting code.
"""
from typing import Any, Optional, Tuple


class CompgenError(Exception):
    """Base class for all compgen exceptions.

    All exceptions specific to compgen inherit from this class so callers can
    catch the whole family with one ``except`` clause.
    """
    def __init__(self, message: str, **kwargs):
        self.message = message
        self.context = kwargs.get('context', {})
        for key, value in kwargs.items():
            if key != 'context':
                self.context[key] = value
        super().__init__(message)

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context information to the exception.

        Args:
            key: The context key
            value: The context value
        """
        self.context[key] = value

    def __str__(self) -> str:
        if not self.context:
            return self.message
        context_str = ', '.join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        if not context_str:
            return self.message
        return f"{self.message} [Context: {context_str}]"

# ===== Configuration Errors =====

class ConfigurationError(CompgenError):
    """Exception raised for invalid configuration settings."""
    def __init__(self, setting: str, value: Any, reason: str, **kwargs):
        message = f"Invalid configuration setting '{setting}': {value}. Reason: {reason}"
        super().__init__(message, setting=setting, value=value, reason=reason, **kwargs)
        self.setting = setting
        self.value = value
        self.reason = reason

# ===== Parsing Errors =====

class ParsingError(CompgenError):
    """Exception raised when a code fragment cannot be parsed.

    The synthesizer raises these internally and recovers from them through its
    fallback strategies; they never reach callers of ``synthesize_definition``.
    """
    def __init__(self, message: str, code_snippet: Optional[str] = None,
                 position: Optional[Tuple[int, int]] = None, **kwargs):
        super().__init__(message, code_snippet=code_snippet, position=position, **kwargs)
        self.code_snippet = code_snippet
        self.position = position

class FragmentSyntaxError(ParsingError):
    """Exception raised when the syntax tree of a fragment contains errors."""
    def __init__(self, message: str, grammar: str, line: Optional[int] = None,
                 column: Optional[int] = None, **kwargs):
        position = (line, column) if line is not None and column is not None else None
        super().__init__(message, position=position, grammar=grammar, **kwargs)
        self.grammar = grammar
        self.line = line
        self.column = column

# ===== Extraction Errors =====

class ExtractionError(CompgenError):
    """Exception raised when an expected element cannot be extracted."""
    pass

class ElementNotFoundError(ExtractionError):
    """Exception raised when no component definition is found in a fragment."""
    def __init__(self, element_type: str, **kwargs):
        message = f"Element of type '{element_type}' not found"
        super().__init__(message, element_type=element_type, **kwargs)
        self.element_type = element_type

class PatternNotFoundError(ExtractionError):
    """Exception raised when a textual pattern search finds nothing."""
    def __init__(self, pattern_name: str, **kwargs):
        message = f"No match for pattern '{pattern_name}'"
        super().__init__(message, pattern_name=pattern_name, **kwargs)
        self.pattern_name = pattern_name

# ===== Markdown Errors =====

class MarkdownParseError(CompgenError):
    """Exception raised when the accumulated markdown buffer cannot be parsed.

    Mid-stream this means "not yet parseable": the stream session swallows it
    and waits for more text.
    """
    def __init__(self, message: str = 'Markdown format parsing failed', buffer_length: Optional[int] = None, **kwargs):
        super().__init__(message, buffer_length=buffer_length, **kwargs)
        self.buffer_length = buffer_length

class TerminalParseError(CompgenError):
    """Exception raised when a finished stream never produced a valid result."""
    def __init__(self, reason: str, buffer_length: Optional[int] = None, **kwargs):
        message = f"Stream finished without a valid result: {reason}"
        super().__init__(message, reason=reason, buffer_length=buffer_length, **kwargs)
        self.reason = reason
        self.buffer_length = buffer_length
