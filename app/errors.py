class ShortenerError(Exception):
    """Base class for errors raised by the link store."""


class ValidationError(ShortenerError):
    pass


class DuplicateCodeError(ValidationError):
    def __init__(self, code: str):
        super().__init__(f"Short code '{code}' already exists")
        self.code = code
