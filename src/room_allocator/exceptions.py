"""Custom exceptions for the room allocator."""


class AllocationError(Exception):
    """Base exception for allocator errors."""

    pass


class PayloadParseError(AllocationError):
    """Input could not be parsed as JSON."""

    def __init__(self, detail: str, source: str | None = None):
        self.detail = detail
        self.source = source
        location = f" from '{source}'" if source else ""
        super().__init__(f"Error parsing JSON input{location}: {detail}")


class InvalidPayloadError(AllocationError):
    """Payload parsed but does not have the expected structure."""

    def __init__(self, message: str, field: str | None = None, index: int | None = None):
        self.field = field
        self.index = index
        location = ""
        if field:
            location += f" in '{field}'"
        if index is not None:
            location += f" at index {index}"
        super().__init__(f"Invalid payload{location}: {message}")


class ConfigError(AllocationError):
    """Reference configuration file is malformed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid configuration file '{path}': {message}")
