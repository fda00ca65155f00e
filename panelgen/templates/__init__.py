"""Template selection for panel entries."""

from .glob import compile_glob, expand_braces, match_glob
from .selector import TemplateStore, select_template

__all__ = [
    "TemplateStore",
    "compile_glob",
    "expand_braces",
    "match_glob",
    "select_template",
]
