from typing import Dict, Iterable

from .patterns import CATALOG, PatternRule

def has_risk(text: str, rules: Iterable[PatternRule] = CATALOG) -> bool:
    """True as soon as any rule matches; never builds replacements."""
    if not text:
        return False
    return any(rule.matcher.search(text) for rule in rules)

def redact(text: str, rules: Iterable[PatternRule] = CATALOG) -> str:
    """
    Replace every match of every rule with the rule's placeholder, in catalog order.
    Pure and idempotent: redact(redact(t)) == redact(t).
    """
    if not text:
        return text
    for rule in rules:
        text = rule.matcher.sub(rule.placeholder, text)
    return text

def match_counts(text: str, rules: Iterable[PatternRule] = CATALOG) -> Dict[str, int]:
    # Counts only, safe to log
    counts: Dict[str, int] = {}
    for rule in rules:
        hits = len(rule.matcher.findall(text))
        if hits:
            counts[rule.category.value] = hits
    return counts
