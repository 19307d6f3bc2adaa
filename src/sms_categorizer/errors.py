"""
Exceptions raised by the categorizer.

Duplicates and spam are ordinary processing outcomes, not errors.
"""


class CategorizerError(Exception):
    """Base exception for all categorizer errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class LoadError(CategorizerError):
    """Vocabulary or model could not be loaded; classification is unavailable."""

    def __init__(self, message: str, code: str = "LOAD_ERROR"):
        super().__init__(message, code)


class ParseError(CategorizerError):
    """A date or amount in a message could not be parsed."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        super().__init__(message, code)


class ClassificationError(CategorizerError):
    """The scoring model returned something that cannot be mapped to a category."""

    def __init__(self, message: str, code: str = "CLASSIFICATION_ERROR"):
        super().__init__(message, code)
