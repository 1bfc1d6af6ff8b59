from .config import LintConfig, load_lint_config
from .report import exit_code, render_text
from .runner import UnknownPathError, build_registry, run_validation

__all__ = [
    "LintConfig",
    "UnknownPathError",
    "build_registry",
    "exit_code",
    "load_lint_config",
    "render_text",
    "run_validation",
]
