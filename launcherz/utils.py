import logging
import os
from pathlib import Path
from typing import Dict, Union

logger = logging.getLogger(__name__)

def is_windows() -> bool:
    return os.name == "nt"

def format_minutes(millis: int) -> int:
    return max(0, int(millis)) // 60000

# --- flat key=value files ---
# Same escapes as java.util.Properties, so older playtime.properties
# files load unchanged.

_ESCAPES = {"\\": "\\\\", "=": "\\=", ":": "\\:", "\n": "\\n", "\r": "\\r",
            "\t": "\\t", "\f": "\\f"}
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t", "f": "\f"}
_COMMENT_CHARS = ("#", "!")
_BLANKS = " \t\f"
_HEX = "0123456789abcdefABCDEF"

def _escape(s: str) -> str:
    out = []
    for i, ch in enumerate(s):
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif i == 0 and (ch in _COMMENT_CHARS or ch == " "):
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ch in ("\x85", "\u2028", "\u2029") or 0xD800 <= ord(ch) <= 0xDFFF:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)

def _join_surrogates(chars) -> str:
    # \uD83C\uDFAE style pairs decode to one code point
    return "".join(chars).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")

def _split_line(line: str):
    """Split at the first unescaped '=' and unescape both halves.

    Blanks after the separator are skipped; everything else is kept as is.
    """
    key, value = [], []
    cur = key
    skip_blanks = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line):
            nxt = line[i + 1]
            code = line[i + 2:i + 6]
            if nxt == "u" and len(code) == 4 and all(c in _HEX for c in code):
                cur.append(chr(int(code, 16)))
                i += 6
            else:
                cur.append(_UNESCAPES.get(nxt, nxt))
                i += 2
            skip_blanks = False
            continue
        if ch == "=" and cur is key:
            cur = value
            skip_blanks = True
        elif not (skip_blanks and ch in _BLANKS):
            cur.append(ch)
            skip_blanks = False
        i += 1
    return _join_surrogates(key), _join_surrogates(value)

def read_kv_file(path: Union[str, Path]) -> Dict[str, str]:
    """Read a properties-style file. Raises OSError if it can't be read."""
    data: Dict[str, str] = {}
    text = Path(path).read_text(encoding="utf-8")
    # only '\n' ends a line; read_text already folded '\r\n' and '\r'
    for line in text.split("\n"):
        s = line.lstrip(_BLANKS)
        if not s or s.startswith(_COMMENT_CHARS):
            continue
        key, value = _split_line(s)
        if key:
            data[key] = value
    return data

def write_kv_file(path: Union[str, Path], data: Dict[str, str], header: str = "") -> None:
    """Write key=value lines via a temp sibling then replace the target."""
    p = Path(path)
    lines = [f"# {header}"] if header else []
    for k in sorted(data):
        lines.append(f"{_escape(k)}={_escape(str(data[k]))}")
    tmp = p.with_name(p.name + ".tmp")
    tmp.write_text("\n".join(lines) + "\n", encoding="utf-8")
    try:
        os.replace(tmp, p)
    except OSError:
        try:
            tmp.unlink()
        except OSError:
            logger.debug("could not remove %s", tmp)
        raise
