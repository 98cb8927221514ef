"""
Capability tag values and per-key match rules.

Tag and parameter values are either text or numbers. Only keys with a typed
rule are converted into a ``TagValue``; every other key is satisfied by its
presence in the pool parameters, whatever the value.
"""
import enum
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Dict, Union

from placement.errors import TypeMismatch


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class NumericValue:
    value: float


TagValue = Union[TextValue, NumericValue]


class TagKind(str, enum.Enum):
    TEXT = "text"
    NUMERIC = "numeric"


def tag_value(raw: Any) -> TagValue:
    """Wrap a raw tag/parameter value into its variant"""
    if isinstance(raw, (TextValue, NumericValue)):
        return raw
    if isinstance(raw, str):
        return TextValue(raw)
    # bool is an int subclass but never a capacity figure
    if isinstance(raw, Real) and not isinstance(raw, bool):
        return NumericValue(raw)
    raise TypeMismatch("<value>", "text or numeric", raw)


def _as_kind(key: str, raw: Any, kind: TagKind, source: str) -> TagValue:
    try:
        value = tag_value(raw)
    except TypeMismatch:
        raise TypeMismatch(key, kind.value, raw, source=source) from None
    expected = TextValue if kind is TagKind.TEXT else NumericValue
    if not isinstance(value, expected):
        raise TypeMismatch(key, kind.value, raw, source=source)
    return value


def exact_text(key: str, desired: Any, offered: Any) -> bool:
    """Desired text must equal the pool's text exactly."""
    want = _as_kind(key, desired, TagKind.TEXT, "tag")
    have = _as_kind(key, offered, TagKind.TEXT, "parameter")
    return want.value == have.value


def numeric_ceiling(key: str, desired: Any, offered: Any) -> bool:
    """Pool value is a ceiling: desired <= ceiling."""
    want = _as_kind(key, desired, TagKind.NUMERIC, "tag")
    have = _as_kind(key, offered, TagKind.NUMERIC, "parameter")
    return want.value <= have.value


def presence_only(key: str, desired: Any, offered: Any) -> bool:
    """Unrecognized tag kinds are satisfied by existence."""
    return True


MatchRule = Callable[[str, Any, Any], bool]

# Keys are matched case-insensitively.
# NOTE: latency uses the same ceiling orientation as iops, so a pool with
# latency=10 accepts a request for latency=5 but not latency=20.
TAG_RULES: Dict[str, MatchRule] = {
    "disktype": exact_text,
    "iops": numeric_ceiling,
    "latency": numeric_ceiling,
}


def rule_for(key: str) -> MatchRule:
    return TAG_RULES.get(key.lower(), presence_only)


def tag_satisfied(key: str, desired: Any, parameters) -> bool:
    """Check a single desired tag against a pool's parameter mapping."""
    if key not in parameters:
        return False
    return rule_for(key)(key, desired, parameters[key])
