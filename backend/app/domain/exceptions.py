"""Domain-specific exceptions — framework-independent."""

MEMBER_NUMBER_EXISTS = "Member number already exists"


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found")


class DuplicateEntityError(Exception):
    """Raised when a write would duplicate a value that must be unique."""

    def __init__(
        self,
        entity_type: str,
        field: str,
        value: object,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(message or f"{entity_type} with {field}='{value}' already exists")


class CustomerValidationError(Exception):
    """Raised when a customer payload is incomplete or cannot be coerced."""

    def __init__(self, message: str = "All fields are required"):
        self.message = message
        super().__init__(message)


class StoreError(Exception):
    """Raised when the underlying store fails (connectivity, unexpected errors).

    The original driver error is chained as ``__cause__``; its text is
    surfaced unchanged to the caller.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
