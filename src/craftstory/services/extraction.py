"""Best-effort field extraction used when the generator is unavailable."""

import re
from dataclasses import dataclass

from craftstory.domain.questions import FieldDescriptor, FieldShape

# Evaluated in order; the first pattern registered for the target field that
# matches wins. Group 1 holds the value.
_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(
            r"(?:my name is|i am called|i'm called|call me|i am|i'm)\s+"
            r"([a-z][a-z .'-]*?)(?=\s+(?:and|from|i|who)\b|[,.!?]|$)",
            re.IGNORECASE,
        ),
        "name",
    ),
    (
        re.compile(
            r"(?:this is|it is called|it's called|called|named)\s+(?:an?\s+|the\s+)?"
            r"([^,.!?]+)",
            re.IGNORECASE,
        ),
        "name",
    ),
    (re.compile(r"(\d+)\s*(?:years?|yrs?)", re.IGNORECASE), "experienceYears"),
    (re.compile(r"\b(pottery|ceramics?)\b", re.IGNORECASE), "craftType"),
    (re.compile(r"\b(weaving|weaver|textiles?)\b", re.IGNORECASE), "craftType"),
    (re.compile(r"\b(wood ?carving|carving|woodwork)\b", re.IGNORECASE), "craftType"),
    (
        re.compile(
            r"\b(embroidery|jewe?l(?:le)?ry|painting|metalwork)\b", re.IGNORECASE
        ),
        "craftType",
    ),
    (
        re.compile(
            r"(?:i live in|i am from|i'm from|based in|from)\s+([^.!?]+)",
            re.IGNORECASE,
        ),
        "location",
    ),
    (
        re.compile(r"(?:made (?:of|from|with)|using|use)\s+([^.!?]+)", re.IGNORECASE),
        "materials",
    ),
    (re.compile(r"(?:rs\.?|₹|inr|\$)\s*(\d[\d,]*)", re.IGNORECASE), "price"),
    (re.compile(r"(\d[\d,]*)\s*(?:rupees|rs\.?|inr|dollars)", re.IGNORECASE), "price"),
)

_CRAFT_TYPE_LABELS = {
    "pottery": "Pottery & Ceramics",
    "ceramic": "Pottery & Ceramics",
    "ceramics": "Pottery & Ceramics",
    "weaving": "Textile Weaving",
    "weaver": "Textile Weaving",
    "textile": "Textile Weaving",
    "textiles": "Textile Weaving",
    "carving": "Wood Carving",
    "woodcarving": "Wood Carving",
    "wood carving": "Wood Carving",
    "woodwork": "Wood Carving",
}

_LIST_SPLIT = re.compile(r",|;|\band\b|\bwith\b|&", re.IGNORECASE)
_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class RuleBasedExtractor:
    """Pattern table extractor with shape-based fallbacks.

    Never returns an empty value for a non-empty transcript.
    """

    patterns: tuple[tuple[re.Pattern[str], str], ...] = _PATTERNS

    def extract(self, transcript: str, field: FieldDescriptor) -> object:
        """Extract a value for one field from a transcript."""
        text = transcript.strip()
        for pattern, target in self.patterns:
            if target != field.name:
                continue
            match = pattern.search(text)
            if match:
                value = match.group(1).strip()
                if value:
                    return coerce_value(_normalize(field.name, value), field.shape)
        return coerce_value(text, field.shape)


def coerce_value(value: object, shape: FieldShape) -> object:
    """Coerce an opaque value to the declared shape where possible."""
    if shape is FieldShape.LIST:
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return split_list(str(value))
    if shape is FieldShape.NUMBER:
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return round(value)
        match = _NUMBER.search(str(value))
        return int(match.group(0)) if match else str(value).strip()
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value).strip()


def split_list(text: str) -> list[str]:
    """Naively split free text into list items."""
    items = [part.strip(" .!?") for part in _LIST_SPLIT.split(text)]
    return [item for item in items if item]


def _normalize(field_name: str, value: str) -> str:
    if field_name == "craftType":
        return _CRAFT_TYPE_LABELS.get(value.lower(), value.title())
    if field_name == "price":
        return value.replace(",", "")
    return value
