from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

OPEN_FENCE = "---"
CLOSE_FENCES = ("---", "...")


class FrontMatterError(ValueError):
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line


@dataclass(frozen=True)
class FrontMatterBlock:
    raw: Optional[str]       # None => no front matter at all
    body: str
    body_start_line: int     # 1-based line where the body begins


def split_front_matter(text: str) -> FrontMatterBlock:
    """
    Split a markdown document into its YAML header and body.

    The header must open on the very first line. A missing closing fence
    raises FrontMatterError.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].rstrip("\r\n").rstrip() != OPEN_FENCE:
        return FrontMatterBlock(raw=None, body=text, body_start_line=1)

    for i in range(1, len(lines)):
        if lines[i].rstrip("\r\n").rstrip() in CLOSE_FENCES:
            raw = "".join(lines[1:i])
            body = "".join(lines[i + 1:])
            return FrontMatterBlock(raw=raw, body=body, body_start_line=i + 2)

    raise FrontMatterError("unterminated front matter (missing closing '---')", line=1)


def parse_front_matter(raw: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # +2: the opening fence occupies line 1 and YAML marks are 0-based
        line = (mark.line + 2) if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(f"invalid YAML: {problem}", line=line) from exc
    except (ValueError, TypeError) as exc:
        # constructor errors, e.g. an impossible unquoted date like 2024-02-30
        raise FrontMatterError(f"invalid YAML: {exc}", line=1) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}", line=2
        )
    return {str(k): v for k, v in data.items()}
