import hashlib
import json
from typing import Any


def sha1_code(code: str) -> str:
    """Return the SHA1 hash of the given code string."""
    return hashlib.sha1(code.encode("utf8", errors="surrogatepass")).hexdigest()


def sha1_json(data: Any) -> str:
    """Return the SHA1 hash of ``data`` serialized as canonical JSON."""
    return sha1_code(json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
