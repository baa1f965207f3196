"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised before any store or cache I/O takes place.
    """

    pass


class NotAuthorizedError(DomainError):
    """Raised when a session's cached profile id does not match the target."""

    def __init__(self, resource: str, resource_id: str, email: str | None):
        self.resource = resource
        self.resource_id = resource_id
        self.email = email
        super().__init__(f"{email or 'anonymous'} is not authorized for {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StoreUnavailableError(DomainError):
    """The persistent store could not complete a read or write.

    Always propagated to the caller; retrying is the store client's job.
    """

    pass


class CacheUnavailableError(DomainError):
    """The cache could not complete a read or write.

    The cache is best-effort, so callers log this and carry on.
    """

    pass
