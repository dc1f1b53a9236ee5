"""Base exception for the Aura gateway domain."""


class DomainException(Exception):
    """
    Base exception for Aura domain errors.

    Each subclass fixes a machine-readable ``code`` and the HTTP status the
    API answers with:

    - 400: the request or the supplied loan records cannot be scored
    - 404: a stored snapshot does not exist
    - 503: the ledger read gateway failed or returned unusable data
    """

    default_code = "AURA_ERROR"
    http_status = 400

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)
