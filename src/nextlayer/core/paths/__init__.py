"""Path helpers for joining search roots with relative resource paths."""

from .concat import (
    STYLES,
    SplitPath,
    concat_path,
    flavour_for,
    is_absolute,
    normalize,
    split_path,
    split_relative,
)

__all__ = [
    "STYLES",
    "SplitPath",
    "concat_path",
    "flavour_for",
    "is_absolute",
    "normalize",
    "split_path",
    "split_relative",
]
