"""
Glob handling for the `globs` front-matter key.

Supported syntax:
    *        any run of characters except '/'
    **       any run of characters including '/'; '**/' also matches zero directories
    ?        one character except '/'
    [abc]    character class; [!abc] / [^abc] negate
    {a,b}    alternatives (may nest)

Patterns without a '/' are matched against the basename, so `*.py` applies
at any depth.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, List, Pattern


class GlobSyntaxError(ValueError):
    pass


def split_globs(value: Any) -> List[str]:
    """Normalize the `globs` value (comma-separated str or list) into patterns."""
    if value is None:
        return []
    if isinstance(value, str):
        return [p.strip() for p in _split_top_level(value, ",") if p.strip()]
    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for item in value:
            if item is None:
                continue
            if isinstance(item, (dict, list, tuple)):
                raise GlobSyntaxError(f"glob entries must be strings, got {type(item).__name__}")
            s = str(item).strip()
            if s:
                out.append(s)
        return out
    raise GlobSyntaxError(f"globs must be a string or a list of strings, got {type(value).__name__}")


def _split_top_level(s: str, sep: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in s:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
        if ch == sep and depth == 0:
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf))
    return parts


def _find_closing_brace(pat: str, start: int) -> int:
    depth = 0
    i = start
    while i < len(pat):
        ch = pat[i]
        if ch == "[":
            # skip character classes so braces inside them are literal
            end = _class_end(pat, i)
            if end == -1:
                return -1
            i = end + 1
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _class_end(pat: str, start: int) -> int:
    j = start + 1
    if j < len(pat) and pat[j] in "!^":
        j += 1
    if j < len(pat) and pat[j] == "]":
        j += 1
    return pat.find("]", j)


def _translate(pat: str) -> str:
    out: List[str] = []
    i, n = 0, len(pat)
    while i < n:
        ch = pat[i]
        if ch == "*":
            if pat.startswith("***", i):
                raise GlobSyntaxError(f"'***' is not a valid wildcard in {pat!r}")
            if pat.startswith("**", i):
                j = i + 2
                if j < n and pat[j] == "/":
                    out.append("(?:.*/)?")
                    i = j + 1
                else:
                    out.append(".*")
                    i = j
            else:
                out.append("[^/]*")
                i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            end = _class_end(pat, i)
            if end == -1:
                raise GlobSyntaxError(f"unterminated character class in {pat!r}")
            body = pat[i + 1:end]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            if not body:
                raise GlobSyntaxError(f"empty character class in {pat!r}")
            body = body.replace("\\", "\\\\")
            if body.startswith("^"):
                body = "\\" + body
            out.append(f"(?!/)[^{body}]" if negate else f"[{body}]")
            i = end + 1
        elif ch == "{":
            end = _find_closing_brace(pat, i)
            if end == -1:
                raise GlobSyntaxError(f"unterminated '{{' in {pat!r}")
            alternatives = _split_top_level(pat[i + 1:end], ",")
            out.append("(?:" + "|".join(_translate(a) for a in alternatives) + ")")
            i = end + 1
        elif ch in "]}":
            raise GlobSyntaxError(f"unbalanced {ch!r} in {pat!r}")
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


def validate_glob(pattern: str) -> None:
    if not pattern or not pattern.strip():
        raise GlobSyntaxError("empty glob pattern")
    if "\\" in pattern:
        raise GlobSyntaxError(f"use '/' as the path separator, not '\\\\', in {pattern!r}")
    if pattern.startswith("/"):
        raise GlobSyntaxError(f"glob must be relative to the project root: {pattern!r}")


@lru_cache(maxsize=1024)
def compile_glob(pattern: str) -> Pattern[str]:
    validate_glob(pattern)
    p = pattern[2:] if pattern.startswith("./") else pattern
    try:
        return re.compile(r"\A" + _translate(p) + r"\Z")
    except re.error as exc:
        raise GlobSyntaxError(f"invalid glob {pattern!r}: {exc}") from exc


def glob_matches(pattern: str, path: str) -> bool:
    rx = compile_glob(pattern)
    p = path.replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    p = p.lstrip("/")
    bare = pattern[2:] if pattern.startswith("./") else pattern
    if "/" not in bare:
        p = p.rsplit("/", 1)[-1]
    return rx.match(p) is not None
