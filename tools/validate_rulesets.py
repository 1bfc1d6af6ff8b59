"""Validate ruleset front matter, file names and index coverage."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# ---- sys.path bootstrap (run from a checkout without installing) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------------------------------

from playbooks.core import settings  # noqa: E402
from playbooks.core.corpus.loader import CorpusNotFoundError  # noqa: E402
from playbooks.core.lint.config import load_lint_config  # noqa: E402
from playbooks.core.lint.report import exit_code, render_text  # noqa: E402
from playbooks.core.lint.runner import UnknownPathError, build_registry, run_validation  # noqa: E402
from playbooks.plugins.checks._internal.config import ChecksRunConfig  # noqa: E402
from playbooks.plugins.checks._internal.graph import CircularDependencyError  # noqa: E402


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("paths", nargs="*", help="Ruleset files to check (default: the whole corpus)")
    ap.add_argument("--root", default=None, help="Corpus directory (default PLAYBOOKS_ROOT or ./RULESETS)")
    ap.add_argument("--config", default=None, help="Lint config file (YAML or JSON)")
    ap.add_argument("--format", choices=("text", "json"), default="text")
    ap.add_argument("--strict", action="store_true", help="Fail on warnings as well as errors")
    ap.add_argument("--enable", action="append", default=None, metavar="CHECK", help="Run only these checks")
    ap.add_argument("--disable", action="append", default=[], metavar="CHECK", help="Skip these checks")
    ap.add_argument("--force", action="store_true", help="Bypass the run cache")
    ap.add_argument("--list-checks", action="store_true", help="List available checks and exit")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)

    logging.basicConfig(
        level="INFO" if args.verbose else settings.log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = settings.corpus_root(args.root)
    config = load_lint_config(Path(args.config) if args.config else None, root=root)

    if args.list_checks:
        reg = build_registry(config)
        for c in reg.list_checks():
            default = "on" if c.enabled_by_default else "off"
            print(f"{c.name:<16} {c.phase:<9} {default:<4} v{c.version}")
        return 0

    override = ChecksRunConfig(enabled=args.enable, disabled=args.disable, force=args.force)
    try:
        report = run_validation(
            root,
            config=config,
            paths=args.paths,
            checks=override,
            fail_on="warn" if args.strict else None,
        )
    except CorpusNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except UnknownPathError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except CircularDependencyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(json.dumps(report, indent=2, sort_keys=True, default=str))
    else:
        print(render_text(report))
    return exit_code(report)


if __name__ == "__main__":
    raise SystemExit(main())
