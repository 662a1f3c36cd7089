"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class CredentialServiceError(AdapterError):
    """The credential service could not give an answer."""

    pass
