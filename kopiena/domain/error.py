"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or missing input."""

    pass


class UnknownMergeTargetError(ValidationError):
    """Raised when a suggestion is merged into a tag that does not exist."""

    def __init__(self, tag_id: str):
        self.tag_id = tag_id
        super().__init__(f"Target tag not found: {tag_id}")


class DuplicateError(DomainError):
    """Raised when a name collides with an existing tag or pending suggestion."""

    pass


class QuotaExceededError(DomainError):
    """Raised when a user already holds the maximum number of pending suggestions."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"You have reached the maximum of {limit} pending suggestions"
        )


class InvalidStateError(DomainError):
    """Raised when acting on a suggestion that is no longer pending."""

    pass


class AuthenticationError(DomainError):
    """Raised when an operation requires a signed-in user."""

    pass


class AuthorizationError(DomainError):
    """Raised when the current user lacks the role an operation requires."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StorageError(DomainError):
    """Raised when the underlying store fails.

    Never retried or swallowed by the core; the caller decides.
    """

    pass
