"""Recovers candidate entities from free-form model replies.

Replies are untrusted text. Recovery runs three ordered chains of pure
functions: cleaners strip wrapping artifacts, locators propose a JSON
substring, repairs fix common syntax damage before a second parse attempt.
json_repair handles whatever the repair chain leaves broken, once every
locator has failed the strict passes.
New heuristics are added by inserting a function into the relevant chain.
"""

import json
import re
from collections.abc import Callable, Sequence
from typing import Any

from json_repair import repair_json

from intake.documents.models import ExtractionStrategy
from intake.entities.models import EntityType
from intake.extraction.exceptions import ReconciliationError
from intake.extraction.models import CandidateEntity, CandidateSource
from intake.logging.logger import Log

Cleaner = Callable[[str], str]
Locator = Callable[[str], str | None]
Repair = Callable[[str], str]

DEFAULT_CONFIDENCE = 0.8

_FENCE_RE = re.compile(r"```[a-zA-Z]*[ \t]*")
_LEADING_PROSE_RE = re.compile(
    r"^(?:here(?:'s| is| are)[^\n:\[{]*|based on the document[^\n:\[{]*"
    r"|the extracted [^\n:\[{]*|segue[^\n:\[{]*|aqui est(?:ão|[áa])[^\n:\[{]*)[:.]?\s*",
    re.IGNORECASE,
)
_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")
_SINGLE_QUOTED_RE = re.compile(r"(?<=[\[{,:])(\s*)'([^'\"\\\n]*)'")
_BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][\w\-]*)(\s*:)")
_SMART_QUOTES = str.maketrans({"\u201c": '"', "\u201d": '"', "\u201e": '"', "\u2018": "'", "\u2019": "'"})

_TYPE_ALIASES: dict[str, EntityType] = {
    "contract": EntityType.CONTRACT,
    "contracts": EntityType.CONTRACT,
    "contrato": EntityType.CONTRACT,
    "expense": EntityType.EXPENSE,
    "expenses": EntityType.EXPENSE,
    "despesa": EntityType.EXPENSE,
    "receivable": EntityType.RECEIVABLE,
    "receivables": EntityType.RECEIVABLE,
    "recebivel": EntityType.RECEIVABLE,
    "recebível": EntityType.RECEIVABLE,
}
_GROUP_KEYS = ("contracts", "expenses", "receivables")
_ENVELOPE_KEYS = frozenset({"type", "entityType", "confidence", "data", "fields", "source"})


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def strip_leading_prose(text: str) -> str:
    return _LEADING_PROSE_RE.sub("", text.strip(), count=1).strip()


def whole_text(text: str) -> str | None:
    return text if text[:1] in ("[", "{") else None


def outer_array(text: str) -> str | None:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def outermost_object(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def object_fragments(text: str) -> str | None:
    fragments = _top_level_objects(text)
    if not fragments:
        return None
    return "[" + ",".join(fragments) + "]"


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def normalize_quotes(text: str) -> str:
    return _SINGLE_QUOTED_RE.sub(r'\1"\2"', text.translate(_SMART_QUOTES))


def quote_bare_keys(text: str) -> str:
    return _BARE_KEY_RE.sub(r'\1"\2"\3', text)


def lenient_parse(text: str) -> list[Any] | dict[str, Any] | None:
    """Last resort for damage the repair chain misses, such as a truncated reply."""
    parsed = repair_json(text, return_objects=True)
    if isinstance(parsed, (list, dict)) and parsed:
        return parsed
    return None


DEFAULT_CLEANERS: tuple[Cleaner, ...] = (strip_code_fences, strip_leading_prose)
DEFAULT_LOCATORS: tuple[Locator, ...] = (whole_text, outer_array, outermost_object, object_fragments)
DEFAULT_REPAIRS: tuple[Repair, ...] = (remove_trailing_commas, normalize_quotes, quote_bare_keys)


class ResponseReconciler:
    """Turns a raw model reply into CandidateEntity objects."""

    def __init__(
        self,
        cleaners: Sequence[Cleaner] = DEFAULT_CLEANERS,
        locators: Sequence[Locator] = DEFAULT_LOCATORS,
        repairs: Sequence[Repair] = DEFAULT_REPAIRS,
    ) -> None:
        self._cleaners = tuple(cleaners)
        self._locators = tuple(locators)
        self._repairs = tuple(repairs)

    def reconcile(
        self,
        raw_text: str,
        file_name: str,
        strategy: ExtractionStrategy,
    ) -> list[CandidateEntity]:
        """Parse a reply into candidates stamped with their source.

        Raises:
            ReconciliationError: if no recovery step yields structured data.
        """
        parsed = self._recover(raw_text, file_name)
        source = CandidateSource(file_name=file_name, extraction_method=strategy)
        candidates: list[CandidateEntity] = []
        for item in self._as_items(parsed, file_name):
            candidate = self._to_candidate(item, source)
            if candidate is None:
                Log.debug(f"Discarding unusable item from {file_name}: {item!r}")
                continue
            candidates.append(candidate)
        Log.info(f"Reconciled {len(candidates)} candidates from {file_name}")
        return candidates

    def _recover(self, raw_text: str, file_name: str) -> Any:
        """First parse holding typed items wins; strict passes precede the lenient one.

        A parse with no typed items (e.g. a nested tag list, or a genuine
        empty array) is kept only as a fallback for when nothing better exists.
        """
        cleaned = raw_text
        for cleaner in self._cleaners:
            cleaned = cleaner(cleaned)
        if not cleaned:
            raise ReconciliationError(f"Empty model response for {file_name}")

        fragments = [
            (locator.__name__, fragment)
            for locator in self._locators
            if (fragment := locator(cleaned)) is not None
        ]
        fallback: Any = None
        found = False
        for parse in (self._parse_with_repairs, lenient_parse):
            for name, fragment in fragments:
                parsed = parse(fragment)
                if parsed is None:
                    Log.debug(f"{name} proposed unparseable JSON for {file_name}")
                    continue
                if _typed_item_count(parsed) > 0:
                    return parsed
                if not found:
                    fallback, found = parsed, True
            if found:
                return fallback

        preview = raw_text[:200].replace("\n", " ")
        raise ReconciliationError(
            f"No valid JSON structure found in model response for {file_name}: {preview!r}"
        )

    def _parse_with_repairs(self, fragment: str) -> Any:
        try:
            return json.loads(fragment)
        except json.JSONDecodeError:
            pass
        repaired = fragment
        for repair in self._repairs:
            repaired = repair(repaired)
        try:
            return json.loads(repaired)
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _as_items(parsed: Any, file_name: str) -> list[Any]:
        if isinstance(parsed, list):
            return parsed
        if isinstance(parsed, dict):
            return _flatten_groups(parsed)
        raise ReconciliationError(
            f"Model response for {file_name} is a {type(parsed).__name__}, not a list"
        )

    @staticmethod
    def _to_candidate(item: Any, source: CandidateSource) -> CandidateEntity | None:
        if not isinstance(item, dict):
            return None
        entity_type = _resolve_type(item.get("type", item.get("entityType")))
        fields = item.get("data", item.get("fields"))
        if not isinstance(fields, dict):
            fields = {k: v for k, v in item.items() if k not in _ENVELOPE_KEYS} or None
        if entity_type is None or fields is None:
            return None
        return CandidateEntity(
            entity_type=entity_type,
            confidence=_resolve_confidence(item.get("confidence")),
            fields=dict(fields),
            source=source,
        )


def _flatten_groups(parsed: dict[str, Any]) -> list[Any]:
    if not any(isinstance(parsed.get(key), list) for key in _GROUP_KEYS):
        return [parsed]
    return [
        {"type": key, **item} if isinstance(item, dict) and "type" not in item else item
        for key in _GROUP_KEYS
        for item in parsed.get(key) or []
    ]


def _typed_item_count(parsed: Any) -> int:
    if isinstance(parsed, dict):
        parsed = _flatten_groups(parsed)
    if not isinstance(parsed, list):
        return 0
    return sum(
        1
        for item in parsed
        if isinstance(item, dict) and _resolve_type(item.get("type", item.get("entityType"))) is not None
    )


def _resolve_type(raw: Any) -> EntityType | None:
    if not isinstance(raw, str):
        return None
    return _TYPE_ALIASES.get(raw.strip().lower())


def _resolve_confidence(raw: Any) -> float:
    if isinstance(raw, bool):
        return DEFAULT_CONFIDENCE
    if isinstance(raw, str):
        try:
            raw = float(raw)
        except ValueError:
            return DEFAULT_CONFIDENCE
    if not isinstance(raw, (int, float)) or raw != raw:
        return DEFAULT_CONFIDENCE
    try:
        value = float(raw)
    except OverflowError:
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, value))


def _top_level_objects(text: str) -> list[str]:
    """Brace-balanced {...} fragments that are not nested in another one."""
    fragments: list[str] = []
    depth = 0
    start = -1
    in_string = False
    escape = False
    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if ch == "\\" and in_string:
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                fragments.append(text[start : i + 1])
    return fragments
