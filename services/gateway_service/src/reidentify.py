import re

from .patterns import NAME_PLACEHOLDER

_SENTENCE_END = re.compile(r"[.!?][\"')\]]*$")
_WORD = re.compile(r"\S+")

def mask_identity(text: str, identity: str, placeholder: str = NAME_PLACEHOLDER) -> str:
    """Replace literal occurrences of a caller-supplied identity, whatever its shape."""
    if not text or not identity or not identity.strip():
        return text
    pattern = rf"(?<!\w){re.escape(identity.strip())}(?!\w)"
    return re.sub(pattern, placeholder, text, flags=re.IGNORECASE)

def restore(result_text: str, original_identity: str, placeholder: str = NAME_PLACEHOLDER) -> str:
    """
    Put the caller's own value back in place of the name placeholder.

    Only ever reinserts `original_identity`, which the caller supplied; nothing
    recovered from the provider is reinserted. One value per call: every
    placeholder occurrence gets the same name.
    """
    if not result_text:
        return result_text
    return result_text.replace(placeholder, original_identity)

def cap_words(text: str, limit: int) -> str:
    """
    Keep the text strictly under `limit` words, ending on a sentence where possible.
    Cuts on offsets in the original string so line and paragraph breaks survive.
    """
    words = list(_WORD.finditer(text))
    if len(words) < limit:
        return text
    kept = words[: limit - 1]
    for word in reversed(kept):
        if _SENTENCE_END.search(word.group()):
            return text[: word.end()]
    return text[: kept[-1].end()]
