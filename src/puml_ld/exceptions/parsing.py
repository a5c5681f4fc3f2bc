'''Custom exceptions for parsing PlantUML sources.'''


class ParseError(Exception):
    """Raised when the source is not a PlantUML document (no start directive)"""
