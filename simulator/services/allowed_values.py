"""
Best-effort lexer for an input's allowed-values expression.

This is a heuristic for UI hints (drop-downs), not a unary-tests grammar:
  - anything containing "..", "<" or ">" is a range/comparison, not enumerable
  - otherwise one enclosing [ ] pair is dropped, the text is split on ",",
    each part is trimmed and one enclosing pair of double quotes removed

Known limitations: escaped quotes, nested lists and quoted literals that
contain commas are not understood. Such input is still split the simple way
but classified as UNPARSED so callers can tell it apart from a real range.
"""

from simulator.models.dmn import AllowedValues, AllowedValuesKind

RANGE_MARKERS = ("..", "<", ">")


def _strip_quotes(part: str) -> str:
    if len(part) >= 2 and part.startswith('"') and part.endswith('"'):
        return part[1:-1]
    return part


def _is_suspect(part: str) -> bool:
    """True when the heuristic cannot vouch for a split part."""
    if part.count('"') % 2 == 1:
        return True
    if '\\"' in part:
        return True
    inner = _strip_quotes(part)
    return '"' in inner or "[" in inner or "]" in inner


def lex_allowed_values(raw: str) -> AllowedValues:
    """Lex raw allowed-values text into display values and a classification."""
    text = (raw or "").strip()
    if not text:
        return AllowedValues(values=[], kind=AllowedValuesKind.NONE)
    if any(marker in text for marker in RANGE_MARKERS):
        return AllowedValues(values=[], kind=AllowedValuesKind.RANGE)

    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]

    values: list[str] = []
    suspect = False
    for part in text.split(","):
        part = part.strip()
        suspect = suspect or _is_suspect(part)
        value = _strip_quotes(part)
        if value:
            values.append(value)

    if suspect:
        kind = AllowedValuesKind.UNPARSED
    elif values:
        kind = AllowedValuesKind.ENUMERATION
    else:
        kind = AllowedValuesKind.NONE
    return AllowedValues(values=values, kind=kind)


def parse_allowed_values(raw: str) -> list[str]:
    """Display values for an allowed-values expression; [] when not enumerable."""
    return list(lex_allowed_values(raw).values)
