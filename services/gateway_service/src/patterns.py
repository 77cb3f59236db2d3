import re
from enum import Enum
from typing import NamedTuple, Pattern, Tuple

class Category(str, Enum):
    NAME = "name"
    PHONE = "phone"
    SSN = "ssn"
    EMAIL = "email"
    DATE = "date"
    ADDRESS = "address"

class PatternRule(NamedTuple):
    category: Category
    matcher: Pattern[str]
    placeholder: str

NAME_PLACEHOLDER = "[PATIENT_NAME]"

_STREET_SUFFIX = r"(?:Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Boulevard|Blvd)"

# Order matters: a capitalized pair inside an address phrase resolves to the
# name placeholder because names are replaced before addresses are looked for.
# Placeholders carry no lowercase letters or digits, so no rule matches them.
CATALOG: Tuple[PatternRule, ...] = (
    PatternRule(
        Category.NAME,
        re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b"),
        NAME_PLACEHOLDER,
    ),
    PatternRule(
        Category.PHONE,
        re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"),
        "[PHONE]",
    ),
    PatternRule(
        Category.SSN,
        re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),
        "[SSN]",
    ),
    PatternRule(
        Category.EMAIL,
        re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
        "[EMAIL]",
    ),
    PatternRule(
        Category.DATE,
        re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
        "[DATE]",
    ),
    PatternRule(
        Category.ADDRESS,
        re.compile(rf"\b\d+\s+(?:[A-Za-z]+\s+)+{_STREET_SUFFIX}\b", re.IGNORECASE),
        "[ADDRESS]",
    ),
)
