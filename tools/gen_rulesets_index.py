from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# ---- sys.path bootstrap (run from a checkout without installing) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------------------------------

from playbooks.core import settings  # noqa: E402
from playbooks.core.corpus.index import (  # noqa: E402
    IndexReadError,
    index_is_current,
    read_index_text,
    render_index_block,
    write_index,
)
from playbooks.core.corpus.loader import CorpusNotFoundError, load_corpus  # noqa: E402
from playbooks.core.lint.config import load_lint_config  # noqa: E402


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--root", default=None, help="Corpus directory (default PLAYBOOKS_ROOT or ./RULESETS)")
    ap.add_argument("--check", action="store_true", help="Fail if RULESETS_INDEX.md differs from regenerated")
    args = ap.parse_args(argv)

    root = settings.corpus_root(args.root)
    try:
        corpus = load_corpus(root, exclude=load_lint_config(root=root).exclude)
    except CorpusNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    index_path = corpus.index_path

    if args.check:
        try:
            text = read_index_text(corpus)
        except IndexReadError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
        if text is None:
            print(f"ERROR: {index_path} missing. Run without --check to generate.", file=sys.stderr)
            return 2
        if not index_is_current(text, render_index_block(corpus)):
            print(f"ERROR: {index_path.name} drift detected. Regenerate and commit.", file=sys.stderr)
            return 3
        print(f"OK: {index_path.name} matches.")
        return 0

    try:
        changed = write_index(index_path, corpus)
    except IndexReadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    print(f"Wrote: {index_path}" if changed else f"Unchanged: {index_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
