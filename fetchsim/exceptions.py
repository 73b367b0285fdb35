class FetchFailure(Exception):
    """Base class for predictable fetch rejections."""

    def __init__(self, identifier: int, message: str):
        super().__init__(message)
        self.identifier = identifier
        self.message = message


class InvalidIdentifierParity(FetchFailure):
    """Raised when the identifier is odd."""

    def __init__(self, identifier: int):
        super().__init__(identifier, "ID must be even")


class InvalidIdentifierRange(FetchFailure):
    """Raised when the identifier falls outside the accepted range."""

    def __init__(self, identifier: int, low: int, high: int):
        super().__init__(identifier, f"Invalid ID {identifier}")
        self.low = low
        self.high = high
