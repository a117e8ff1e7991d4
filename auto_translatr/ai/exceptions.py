"""
AI Service Exceptions

Kept apart from service.py and providers.py so both can raise them.
"""


class TranslationError(Exception):
    """Translation backend error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None, status_code: int = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.status_code = status_code
