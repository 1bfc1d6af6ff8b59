import pytest

from playbooks.core.corpus.globs import GlobSyntaxError, compile_glob, glob_matches, split_globs


def test_split_comma_separated_string():
    assert split_globs("**/*.ts, **/*.tsx") == ["**/*.ts", "**/*.tsx"]


def test_split_keeps_commas_inside_braces():
    assert split_globs("src/**/*.{ts,tsx},docs/*.md") == ["src/**/*.{ts,tsx}", "docs/*.md"]


def test_split_list_drops_blanks():
    assert split_globs(["*.py", "", None, " *.pyi "]) == ["*.py", "*.pyi"]


def test_split_none_is_empty():
    assert split_globs(None) == []


def test_split_rejects_mapping_values():
    with pytest.raises(GlobSyntaxError):
        split_globs({"a": 1})
    with pytest.raises(GlobSyntaxError):
        split_globs([["nested"]])


@pytest.mark.parametrize(
    "pattern,path,expected",
    [
        ("**/*.py", "app/main.py", True),
        ("**/*.py", "main.py", True),
        ("**/*.py", "app/main.pyc", False),
        ("src/*.ts", "src/index.ts", True),
        ("src/*.ts", "src/lib/index.ts", False),
        ("src/**", "src/lib/index.ts", True),
        ("*.md", "docs/guide/intro.md", True),
        ("docs/**/*.{md,mdx}", "docs/a/b.mdx", True),
        ("docs/**/*.{md,mdx}", "blog/b.mdx", False),
        ("file?.txt", "file1.txt", True),
        ("file?.txt", "file12.txt", False),
        ("[!_]*.py", "_private.py", False),
        ("[!_]*.py", "public.py", True),
        ("./src/*.js", "src/app.js", True),
        ("vite.config.*", "./vite.config.ts", True),
    ],
)
def test_glob_matches(pattern, path, expected):
    assert glob_matches(pattern, path) is expected


@pytest.mark.parametrize(
    "pattern",
    ["", "src\\*.py", "/abs/*.py", "***.py", "src/[abc", "src/{a,b", "src/a}b", "x[]"],
)
def test_invalid_patterns(pattern):
    with pytest.raises(GlobSyntaxError):
        compile_glob(pattern)
