"""Domain-layer error definitions.

Every error here is an *expected* failure: the service facade turns it into
a failed result envelope instead of letting it propagate. The ``code`` class
attribute is the stable, machine-readable identifier surfaced to callers.
"""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""

    code: str = "domain_error"


class ValidationError(DomainError):
    """Raised when input is malformed (e.g. password and confirmation differ)."""

    code = "validation_error"


class ConflictError(DomainError):
    """Raised when an operation would violate a uniqueness rule."""

    code = "conflict"


class NotFoundError(DomainError):
    """Raised when a referenced account or task does not exist."""

    code = "not_found"


class AuthenticationError(DomainError):
    """Raised when credentials do not match an account.

    The message never says whether the username or the password was wrong.
    """

    code = "authentication_failed"

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class InvalidTokenError(DomainError):
    """Raised when a recovery token is missing, wrong, expired or already used."""

    code = "invalid_token"

    def __init__(self) -> None:
        super().__init__("Recovery token is invalid or has expired.")


# ============================================================================
#                       Account related errors
# ============================================================================


class PasswordMismatchError(ValidationError):
    """Raised when a password and its confirmation differ."""

    def __init__(self) -> None:
        super().__init__("Password and password confirmation do not match.")


class UsernameTakenError(ConflictError):
    """Raised when registering with a username that is already in use."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' is already in use.")
        self.username = username


class EmailTakenError(ConflictError):
    """Raised when registering with an e-mail address that is already in use."""

    def __init__(self, email: str) -> None:
        super().__init__(f"E-mail address '{email}' is already in use.")
        self.email = email


class AccountNotFoundError(NotFoundError):
    """Raised when no account matches the given id or username."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Account '{reference}' does not exist.")
        self.reference = reference


class ConcurrentUpdateError(ConflictError):
    """Raised when an account changed between being loaded and being saved."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            f"Account '{account_id}' was modified concurrently; reload and retry."
        )
        self.account_id = account_id


# ============================================================================
#                         Task related errors
# ============================================================================


class TaskNotFoundError(NotFoundError):
    """Raised when no task matches the given id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task '{task_id}' does not exist.")
        self.task_id = task_id
