'''Custom exceptions for converting a diagram model into JSON-LD.'''


class ConversionError(Exception):
    """Raised when there are errors converting the diagram model to JSON-LD"""
