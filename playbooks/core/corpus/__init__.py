from .catalog import Catalog
from .front_matter import FrontMatterError
from .globs import GlobSyntaxError, compile_glob, glob_matches, split_globs
from .loader import CorpusNotFoundError, load_corpus
from .models import Corpus, RulesetDocument, RulesetMeta

__all__ = [
    "Catalog",
    "Corpus",
    "CorpusNotFoundError",
    "FrontMatterError",
    "GlobSyntaxError",
    "RulesetDocument",
    "RulesetMeta",
    "compile_glob",
    "glob_matches",
    "load_corpus",
    "split_globs",
]
