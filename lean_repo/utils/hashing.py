"""Key hashing utilities.

Cache keys are caller-chosen strings and may contain characters that are
not safe in file names ("/", ":", spaces). Drivers that persist one file
per key map the key through hash_key() first.
"""

import hashlib

DEFAULT_ALGORITHM = "sha256"


def hash_key(key: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Compute a stable, filesystem-safe digest of a cache key.

    Args:
        key: Cache key
        algorithm: Hash algorithm ("sha256", "md5", "blake2b")

    Returns:
        Hex digest of the UTF-8 encoded key

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm == "sha256":
        hasher = hashlib.sha256()
    elif algorithm == "md5":
        hasher = hashlib.md5()
    elif algorithm == "blake2b":
        hasher = hashlib.blake2b(digest_size=20)
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")

    hasher.update(key.encode("utf-8"))
    return hasher.hexdigest()
