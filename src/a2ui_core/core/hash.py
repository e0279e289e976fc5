"""Fast non-cryptographic hashing for surface fingerprints."""

import xxhash


def hash_string(text: str) -> str:
    """
    Hash string to an xxhash64 hex digest.

    Examples:
        >>> len(hash_string("test"))
        16
    """
    return xxhash.xxh64(text.encode("utf-8")).hexdigest()


__all__ = ["hash_string"]
