class ProviderUnavailable(Exception):
    """The vision provider could not be reached, timed out or is disabled."""


class MalformedResponse(ValueError):
    """The provider answered but the content is not the expected JSON shape."""


class InsufficientInput(ValueError):
    """Raised when a request cannot produce a meaningful result from the given items."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"need at least {required} items, have {available}")


class InvalidImage(ValueError):
    pass
