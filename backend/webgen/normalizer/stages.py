"""
Repair stages for model completions.

Each stage is a pure text -> text transform. The ladder order is fixed:

    trim -> strip_fences -> strip_control_chars -> extract_boundaries -> repair_escaping

The normalizer attempts a parse after every stage.
Transforms never raise; anything they cannot handle is left untouched.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional


BOM = "\ufeff"

# Opening fence with optional language tag, consumed together with its line break
_FENCE_OPEN_RE = re.compile(r"```[ \t]*[A-Za-z0-9_+.#-]*[ \t]*\r?\n")
_FENCE_RE = re.compile(r"```")

# C0 and C1 control ranges minus \t \n \r
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_VALID_ESCAPES = set('"\\/bfnrtu')
_HEX = set("0123456789abcdefABCDEF")
_STRING_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


@dataclass(frozen=True)
class RepairStage:
    name: str
    transform: Callable[[str], str]

    def apply(self, text: str) -> str:
        try:
            return self.transform(text)
        except Exception:
            # a stage that cannot apply is a no-op
            return text


# ----------------------------
# Simple stages
# ----------------------------

def trim(text: str) -> str:
    text = text.strip()
    if text.startswith(BOM):
        text = text[len(BOM):].strip()
    return text


def strip_fences(text: str) -> str:
    text = _FENCE_OPEN_RE.sub("", text)
    return _FENCE_RE.sub("", text)


def strip_control_chars(text: str) -> str:
    return _CONTROL_RE.sub("", text)


def extract_boundaries(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


# ----------------------------
# Escaping repair
# ----------------------------

def _next_significant(text: str, index: int) -> Optional[str]:
    while index < len(text):
        if not text[index].isspace():
            return text[index]
        index += 1
    return None


def _is_closing_quote(text: str, index: int) -> bool:
    """
    A quote closes its string when what follows looks like JSON structure.
    Anything else is treated as a stray quote inside the string content.
    """
    nxt = _next_significant(text, index + 1)
    return nxt is None or nxt in ",}]:"


def _read_string(text: str, index: int, quote: str, out: List[str]) -> int:
    """
    Copy a string literal starting after its opening quote, re-escaping its
    content for a double-quoted JSON string. Returns the index after the
    closing quote.
    """
    out.append('"')
    length = len(text)
    while index < length:
        ch = text[index]

        if ch == "\\":
            nxt = text[index + 1] if index + 1 < length else ""
            if nxt == "'":
                out.append("'")
                index += 2
                continue
            if nxt == "u":
                digits = text[index + 2:index + 6]
                if len(digits) == 4 and all(d in _HEX for d in digits):
                    out.append("\\u" + digits)
                    index += 6
                    continue
                out.append("\\\\")
                index += 1
                continue
            if nxt in _VALID_ESCAPES:
                out.append(ch + nxt)
                index += 2
                continue
            # lone backslash
            out.append("\\\\")
            index += 1
            continue

        if ch == quote:
            if _is_closing_quote(text, index):
                out.append('"')
                return index + 1
            out.append('\\"' if quote == '"' else "'")
            index += 1
            continue

        if ch == '"':
            # only reachable inside single-quoted strings
            out.append('\\"')
        elif ch in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append("\\u%04x" % ord(ch))
        else:
            out.append(ch)
        index += 1

    # unterminated string: close it so the parser can report something sharper
    out.append('"')
    return index


_BARE_KEY_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$-]*")


def repair_escaping(text: str) -> str:
    """
    Best-effort escaping repair. Not a JSON tokenizer.

    Outside string literals:
    - bare or single-quoted property names become double-quoted
    - a trailing comma before '}' or ']' is dropped

    Inside string literals:
    - lone backslashes are doubled
    - stray double quotes are escaped
    - raw newlines, carriage returns, tabs and other control characters
      are escaped
    """
    out: List[str] = []
    last: Optional[str] = None  # last non-whitespace character emitted
    index = 0
    length = len(text)

    while index < length:
        ch = text[index]

        if ch == '"':
            index = _read_string(text, index + 1, '"', out)
            last = '"'
            continue

        if ch == "'" and last in (None, "{", "[", ",", ":"):
            index = _read_string(text, index + 1, "'", out)
            last = '"'
            continue

        if ch == ",":
            if _next_significant(text, index + 1) in ("}", "]"):
                index += 1
                continue
            out.append(ch)
            last = ch
            index += 1
            continue

        if last in ("{", ","):
            match = _BARE_KEY_RE.match(text, index)
            if match and _next_significant(text, match.end()) == ":":
                out.append('"%s"' % match.group(0))
                last = '"'
                index = match.end()
                continue

        out.append(ch)
        if not ch.isspace():
            last = ch
        index += 1

    return "".join(out)


REPAIR_LADDER: List[RepairStage] = [
    RepairStage("trim", trim),
    RepairStage("strip_fences", strip_fences),
    RepairStage("strip_control_chars", strip_control_chars),
    RepairStage("extract_boundaries", extract_boundaries),
    RepairStage("repair_escaping", repair_escaping),
]
