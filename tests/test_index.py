from pathlib import Path

from conftest import write_file
from playbooks.core.corpus.index import (
    BLOCK_BEGIN,
    BLOCK_END,
    extract_block,
    extract_links,
    index_is_current,
    render_index_block,
    update_index_text,
    write_index,
)
from playbooks.core.corpus.loader import load_corpus
from tools.gen_rulesets_index import main as gen_main


def _codes(findings):
    return [f["code"] for f in findings]


def test_extract_links_filters_and_strips_anchors():
    text = (
        "- [A](a-ruleset.md)\n"
        "- [A again](./a-ruleset.md#usage)\n"
        "- [Site](https://example.com/b-ruleset.md)\n"
        "- [Image](logo.png)\n"
        '- [C](c-ruleset.md "C title")\n'
    )
    assert extract_links(text) == ["a-ruleset.md", "c-ruleset.md"]


def test_render_block_rows(corpus_root):
    block = render_index_block(load_corpus(corpus_root))
    lines = block.split("\n")
    assert lines[0] == BLOCK_BEGIN
    assert lines[-1] == BLOCK_END
    assert lines[3] == "| [Docs Ruleset](docs-ruleset.md) | Documentation writing guidance for markdown sites. | model_decision |  |"
    assert lines[5].endswith("| glob | `**/*.py` |")


def test_render_escapes_pipes(corpus_root):
    write_file(
        corpus_root,
        "pipe-ruleset.md",
        "---\ntrigger: manual\ndescription: Use a | b when piping commands.\n---\n# Pipes\n",
    )
    block = render_index_block(load_corpus(corpus_root))
    assert "Use a \\| b when piping commands." in block


def test_update_appends_then_replaces():
    text = update_index_text("# Index\n", f"{BLOCK_BEGIN}\nold\n{BLOCK_END}")
    assert text == f"# Index\n\n{BLOCK_BEGIN}\nold\n{BLOCK_END}\n"
    text = update_index_text(text, f"{BLOCK_BEGIN}\nnew\n{BLOCK_END}")
    assert extract_block(text) == f"{BLOCK_BEGIN}\nnew\n{BLOCK_END}"
    assert text.startswith("# Index\n")


def test_index_is_current_ignores_trailing_whitespace():
    block = f"{BLOCK_BEGIN}\n| a |\n{BLOCK_END}"
    assert index_is_current(f"intro\n{BLOCK_BEGIN}\n| a |   \n{BLOCK_END}\n", block)
    assert not index_is_current("no block here", block)


def test_write_index_is_idempotent(corpus_root):
    corpus = load_corpus(corpus_root)
    assert write_index(corpus.index_path, corpus) is True
    assert write_index(corpus.index_path, load_corpus(corpus_root)) is False
    text = corpus.index_path.read_text(encoding="utf-8")
    assert text.startswith("# Rulesets Index\n")


def test_index_coverage_clean(lint):
    assert lint("index_coverage") == []


def test_index_coverage_unlisted_and_broken(lint, corpus_root):
    write_file(corpus_root, "new-ruleset.md", "---\ntrigger: manual\ndescription: A brand new manual ruleset.\n---\n# New\n")
    (corpus_root / "docs-ruleset.md").unlink()
    findings = lint("index_coverage")
    assert sorted(_codes(findings)) == ["index.broken_link", "index.unlisted"]
    broken = next(f for f in findings if f["code"] == "index.broken_link")
    assert broken["path"] == "RULESETS_INDEX.md"
    assert broken["line"] == 3
    assert broken["data"] == {"target": "docs-ruleset.md"}


def test_index_missing(lint, corpus_root):
    (corpus_root / "RULESETS_INDEX.md").unlink()
    findings = lint("index_coverage")
    assert _codes(findings) == ["index.missing"]
    assert findings[0]["path"] is None


def test_index_coverage_skipped_for_file_runs(lint, corpus_root):
    (corpus_root / "RULESETS_INDEX.md").unlink()
    assert lint("index_coverage", paths=["python-ruleset.md"]) == []


def test_index_sync_states(lint, corpus_root):
    assert _codes(lint("index_sync")) == ["index.no_managed_block"]

    corpus = load_corpus(corpus_root)
    write_index(corpus.index_path, corpus)
    assert lint("index_sync") == []

    write_file(corpus_root, "general-ruleset.md", "---\ntrigger: always_on\ndescription: Rewritten general rules for all work.\n---\n# General\n")
    assert _codes(lint("index_sync")) == ["index.out_of_date"]


def test_index_sync_off_by_default(lint, corpus_root):
    assert "index_sync" not in {f["check"] for f in lint()}


def test_gen_tool_check_and_write(corpus_root, capsys):
    root = str(corpus_root)
    assert gen_main(["--root", root, "--check"]) == 3
    assert gen_main(["--root", root]) == 0
    assert "Wrote:" in capsys.readouterr().out
    assert gen_main(["--root", root]) == 0
    assert "Unchanged:" in capsys.readouterr().out
    assert gen_main(["--root", root, "--check"]) == 0


def test_gen_tool_missing_index_and_root(corpus_root, tmp_path):
    (corpus_root / "RULESETS_INDEX.md").unlink()
    assert gen_main(["--root", str(corpus_root), "--check"]) == 2
    assert gen_main(["--root", str(tmp_path / "missing")]) == 2


def test_repository_index_matches_front_matter():
    root = Path(__file__).resolve().parents[1] / "RULESETS"
    corpus = load_corpus(root)
    assert index_is_current(corpus.index_path.read_text(encoding="utf-8"), render_index_block(corpus))


def test_index_findings_ordered_by_path(lint, corpus_root):
    write_file(corpus_root, "zeta-ruleset.md", "---\ntrigger: manual\ndescription: Not linked from the index.\n---\n# Zeta\n")
    write_file(corpus_root, "RULESETS_INDEX.md", INDEX_WITH_DEAD_LINK)
    findings = lint("index_coverage")
    assert [(f["path"], f["code"]) for f in findings] == [
        ("RULESETS_INDEX.md", "index.broken_link"),
        ("zeta-ruleset.md", "index.unlisted"),
    ]


def test_non_utf8_index_is_reported(lint, corpus_root):
    (corpus_root / "RULESETS_INDEX.md").write_bytes(b"# Index caf\xe9\n- [Docs](docs-ruleset.md)\n")
    findings = lint("index_coverage", "index_sync")
    assert _codes(findings) == ["index.unreadable"]
    assert findings[0]["path"] == "RULESETS_INDEX.md"
    assert gen_main(["--root", str(corpus_root), "--check"]) == 2
    assert gen_main(["--root", str(corpus_root)]) == 2


INDEX_WITH_DEAD_LINK = """# Rulesets Index

- [Docs](docs-ruleset.md)
- [General](general-ruleset.md)
- [Python](python-ruleset.md)
- [Gone](gone-ruleset.md)
"""
