"""Indentation post-processor: compact JSON text → tab-indented JSON text.

Works on the text alone; the value graph is not walked again.
"""

from __future__ import annotations

import re

_STRING_BODY_RE = re.compile(r'(?:[^"\\]|\\.)*"?', re.DOTALL)


def apply_indented_formatting(text: str) -> str:
    """Rewrite compact JSON with newlines and tabs.

    - ``[`` after ``,`` and ``{`` after ``,`` or ``[`` open on a new line
    - every ``]``/``}`` closes on a new line one level up
    - a quoted key after ``{``, ``[`` or ``,`` starts a new line; values after
      ``:`` stay inline
    """
    out: list[str] = []
    depth = 0
    prev: str | None = None
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == "[":
            if prev == ",":
                out.append("\n" + "\t" * depth)
            out.append(c)
            depth += 1
        elif c == "{":
            if prev == "," or prev == "[":
                out.append("\n" + "\t" * depth)
            out.append(c)
            depth += 1
        elif c == "]" or c == "}":
            depth = max(depth - 1, 0)
            out.append("\n" + "\t" * depth + c)
        elif c == '"':
            if prev in ("{", "[", ","):
                out.append("\n" + "\t" * depth)
            body = _STRING_BODY_RE.match(text, i + 1).group()
            out.append(c + body)
            i += 1 + len(body)
            prev = '"'
            continue
        else:
            out.append(c)
        prev = c
        i += 1
    return "".join(out)
