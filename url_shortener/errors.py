class ShortenerError(Exception):
    """Base class for every error the shortener raises."""


class AliasExists(ShortenerError):
    """A mapping with this alias is already stored."""


class AliasNotFound(ShortenerError):
    """No mapping is stored for this alias."""


class WrongUser(ShortenerError):
    """The alias belongs to a different user."""


class StorageError(ShortenerError):
    """The database could not be reached or the statement failed."""


class ValidationFailed(ShortenerError):
    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))
