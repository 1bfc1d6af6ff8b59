from __future__ import annotations

from fastapi import HTTPException

from playbooks.core import settings
from playbooks.core.corpus.loader import CorpusNotFoundError, load_corpus
from playbooks.core.corpus.models import Corpus
from playbooks.core.lint.config import LintConfig, load_lint_config


def lint_config() -> LintConfig:
    return load_lint_config(root=settings.corpus_root())


def corpus() -> Corpus:
    """Load the corpus fresh per request; a missing root is a 503, not a 500."""
    root = settings.corpus_root()
    try:
        return load_corpus(root, exclude=lint_config().exclude)
    except CorpusNotFoundError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
