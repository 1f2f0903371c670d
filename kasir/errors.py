class KasirError(Exception):
    """Base class for errors raised by the stores and engines."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(KasirError):
    """Malformed input: bad id, empty item list, non-positive quantity, bad date."""

    status_code = 400


class NotFoundError(KasirError):
    """A referenced entity does not exist."""

    status_code = 404


class StoreError(KasirError):
    """The backing store failed. The message is passed through unredacted."""

    status_code = 500


class UnknownItemError(NotFoundError):
    """A transaction item names a product that does not exist; the request itself is at fault."""

    status_code = 400
