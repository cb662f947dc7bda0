"""Exception hierarchy for the identifier mediator."""


class IdentifierServiceError(Exception):
    """Package base exception."""


class ProviderError(IdentifierServiceError):
    """Failure raised by an identifier provider operation."""


class IdentifierError(ProviderError):
    """Scheme-specific identifier failure (minting, registration, syntax)."""


class IdentifierNotFoundError(IdentifierError):
    """The identifier is unknown to the provider."""


class IdentifierNotResolvableError(IdentifierError):
    """The identifier is known but cannot be resolved to an object."""


class AuthorizationError(ProviderError):
    """Caller lacks rights to mutate the object or register an identifier."""


class StorageError(ProviderError):
    """Underlying object store or registry persistence failed."""


class ParentServiceError(IdentifierServiceError):
    """Provider has no live parent mediator to call back into."""
