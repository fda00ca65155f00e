"""Post-processing applied to rendered templates."""

from .inject import inject_tags

__all__ = ["inject_tags"]
