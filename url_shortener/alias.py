import secrets
import string

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
ALIAS_LENGTH = 10


def generate_alias(length: int = ALIAS_LENGTH) -> str:
    """Return ``length`` characters drawn uniformly from ``ALPHABET``.

    Uses the OS entropy source, so concurrent calls never share a seed.
    Uniqueness is not guaranteed; the unique constraint on ``url.alias``
    catches collisions.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError(f"alias length must be a positive integer, got {length!r}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
