import pytest

from conftest import write_file
from playbooks.core.corpus.catalog import Catalog
from playbooks.core.corpus.loader import CorpusNotFoundError, load_corpus


def test_load_corpus_separates_reserved_documents(corpus_root):
    corpus = load_corpus(corpus_root)
    assert [d.rel_path for d in corpus.documents] == [
        "docs-ruleset.md",
        "general-ruleset.md",
        "python-ruleset.md",
    ]
    assert set(corpus.reserved) == {"RULESETS_INDEX.md", "CONTRIBUTING.md"}


def test_load_corpus_missing_root(tmp_path):
    with pytest.raises(CorpusNotFoundError):
        load_corpus(tmp_path / "nope")


def test_load_corpus_exclude_patterns(corpus_root):
    corpus = load_corpus(corpus_root, exclude=["docs-*.md"])
    assert corpus.get("docs-ruleset.md") is None
    assert corpus.get("python-ruleset.md") is not None


def test_document_fields(corpus_root):
    doc = load_corpus(corpus_root).get_by_slug("python")
    assert doc.parsed
    assert doc.title == "Python Ruleset"
    assert doc.front_matter["trigger"] == "glob"
    assert doc.body_start_line == 8
    assert doc.title_line() == (9, "Python Ruleset")
    assert doc.key_line("globs") == 4


def test_unterminated_front_matter_is_recorded(corpus_root):
    write_file(corpus_root, "broken-ruleset.md", "---\ntrigger: glob\n# Title\n")
    doc = load_corpus(corpus_root).get("broken-ruleset.md")
    assert doc.has_front_matter
    assert not doc.parsed
    assert doc.front_matter_error.line == 1


def test_non_utf8_file_is_recorded(corpus_root):
    (corpus_root / "latin-ruleset.md").write_bytes(b"---\ndescription: caf\xe9\n---\n")
    doc = load_corpus(corpus_root).get("latin-ruleset.md")
    assert not doc.parsed
    assert "cannot read file" in doc.front_matter_error.message


def test_fingerprint_changes_with_content(corpus_root):
    before = load_corpus(corpus_root).fingerprint()
    assert before == load_corpus(corpus_root).fingerprint()
    write_file(corpus_root, "general-ruleset.md", "---\ntrigger: always_on\n---\n# Changed\n")
    assert load_corpus(corpus_root).fingerprint() != before


def test_catalog_lists_only_parsed_documents(corpus_root):
    write_file(corpus_root, "plain-ruleset.md", "# No front matter\n")
    write_file(corpus_root, "bad-ruleset.md", "---\ntrigger: [\n---\n")
    catalog = Catalog.from_corpus(load_corpus(corpus_root))
    slugs = [m.slug for m in catalog.list()]
    assert "bad" not in slugs
    assert {"docs", "general", "python"} <= set(slugs)


def test_catalog_get_returns_body_and_string_dates(corpus_root):
    detail = Catalog.from_corpus(load_corpus(corpus_root)).get("python")
    assert detail.last_updated == "2025-01-15"
    assert detail.globs == ["**/*.py"]
    assert detail.body.lstrip().startswith("# Python Ruleset")


def test_catalog_match_uses_trigger_and_globs(corpus_root):
    catalog = Catalog.from_corpus(load_corpus(corpus_root))
    assert [m.slug for m in catalog.match("app/main.py")] == ["general", "python"]
    assert [m.slug for m in catalog.match("README.md")] == ["general"]


def test_impossible_date_does_not_abort_load(corpus_root):
    write_file(
        corpus_root,
        "bad-date-ruleset.md",
        "---\ntrigger: manual\ndescription: Ruleset with an impossible date.\nlast_updated: 2024-02-30\n---\n# Bad date\n",
    )
    corpus = load_corpus(corpus_root)
    doc = corpus.get("bad-date-ruleset.md")
    assert not doc.parsed
    assert "invalid YAML" in doc.front_matter_error.message
    assert "bad-date" not in [m.slug for m in Catalog.from_corpus(corpus).list()]
