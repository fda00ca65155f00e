"""Shell-style glob compilation for template rules.

Supported syntax:

- `*` matches any run of characters within one path segment
- `**` matches across segments; `**/` may also match zero segments
- `?` matches one character other than `/`
- `[abc]`, `[a-z]`, `[!abc]` character classes
- `{a,b}` alternation, nestable (`{js,{ts,tsx}}`)

Matching is anchored at both ends and never touches the filesystem.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Tuple


def expand_braces(pattern: str) -> List[str]:
    """Expand `{a,b}` groups into the full list of alternative patterns."""
    for index, char in enumerate(pattern):
        if char != "{":
            continue
        group = _split_group(pattern, index)
        if group is None:
            continue
        end, parts = group
        if len(parts) < 2:
            continue
        prefix, suffix = pattern[:index], pattern[end + 1 :]
        expanded: List[str] = []
        for part in parts:
            expanded.extend(expand_braces(f"{prefix}{part}{suffix}"))
        return expanded
    return [pattern]


def _split_group(pattern: str, start: int) -> Optional[Tuple[int, List[str]]]:
    depth = 0
    parts: List[str] = []
    segment_start = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                parts.append(pattern[segment_start:index])
                return index, parts
        elif char == "," and depth == 1:
            parts.append(pattern[segment_start:index])
            segment_start = index + 1
    return None


def translate(pattern: str) -> str:
    """Translate a brace-free glob into a regular expression body."""
    output: List[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "*":
            at_segment_start = index == 0 or pattern[index - 1] == "/"
            if pattern.startswith("**", index) and at_segment_start:
                after = index + 2
                if after == length:
                    output.append(".*")
                    index = after
                    continue
                if pattern[after] == "/":
                    output.append("(?:.*/)?")
                    index = after + 1
                    continue
            # Collapse runs of stars that are not a standalone `**` segment.
            while index < length and pattern[index] == "*":
                index += 1
            output.append("[^/]*")
            continue
        if char == "?":
            output.append("[^/]")
        elif char == "[":
            closing = pattern.find("]", index + 2 if pattern.startswith("[!", index) else index + 1)
            if closing == -1:
                output.append(re.escape(char))
            else:
                body = pattern[index + 1 : closing].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                elif body.startswith("^"):
                    body = "\\" + body
                output.append(f"[{body}]")
                index = closing + 1
                continue
        else:
            output.append(re.escape(char))
        index += 1
    return "".join(output)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> "re.Pattern[str]":
    """Compile a glob (braces included) into an anchored regular expression."""
    alternatives = [translate(alternative) for alternative in expand_braces(pattern)]
    return re.compile(f"(?:{'|'.join(alternatives)})\\Z")


def match_glob(path: str, pattern: str) -> bool:
    """Return True when the posix path matches the glob pattern."""
    normalized = path.replace("\\", "/")
    return compile_glob(pattern).match(normalized) is not None


__all__ = ["compile_glob", "expand_braces", "match_glob", "translate"]
