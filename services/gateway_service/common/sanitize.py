# common/sanitize.py
import hashlib
from typing import Any

def hash_preview(s: Any, n: int = 12) -> str:
    if not isinstance(s, str):
        s = str(s)
    return f"sha256={hashlib.sha256(s.encode('utf-8')).hexdigest()[:n]},len={len(s)}"
