class FlattenError(Exception):
    pass


class InvalidInputKind(FlattenError, TypeError):
    """The value handed to flatten() does not resolve to a model or dataclass."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"flatten() must be called with a model or dataclass instance, got {type(value).__name__}")


class CyclicValueError(FlattenError, ValueError):
    """A composite was reached again while it was still being walked."""

    def __init__(self, path: str, value: object):
        self.path = path
        self.value = value
        super().__init__(f"cycle detected at {path or '<root>'!r}: {type(value).__name__} contains itself")
