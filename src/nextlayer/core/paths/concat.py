"""Structural path splitting and joining.

Roots are joined with relative resource paths by decomposing both sides
rather than concatenating strings:

    root      -> (volume, root marker, directories, file component)
    relative  -> directory segments
    result    =  volume + root marker + (root dirs ++ relative dirs) + file

A root may carry a drive/UNC volume (``C:``, ``\\\\server\\share``) or a
trailing file-like segment; naive string concatenation would corrupt either.
Both POSIX and Windows path flavours are supported regardless of the host
platform, which keeps Windows behaviour testable everywhere.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Optional, Sequence, Tuple, Type, Union

from nextlayer.core.exceptions import InvalidRelativePathError

PathLike = Union[str, "os.PathLike[str]"]
RelativeLike = Union[PathLike, Sequence[str]]

STYLES = ("native", "posix", "windows")

_FLAVOURS: dict[str, Type[PurePath]] = {
    "posix": PurePosixPath,
    "windows": PureWindowsPath,
}


@dataclass(frozen=True)
class SplitPath:
    """A path decomposed into volume, root marker, directories and file."""

    volume: str
    root: str
    directories: Tuple[str, ...]
    file: str = ""

    @property
    def anchor(self) -> str:
        return self.volume + self.root


def flavour_for(style: Optional[str]) -> Type[PurePath]:
    """Return the pure path class for ``style`` (``None`` means native)."""
    if style is None or style == "native":
        return PureWindowsPath if os.name == "nt" else PurePosixPath
    try:
        return _FLAVOURS[style]
    except KeyError:
        raise ValueError(f"Unknown path style '{style}'. Expected one of: {', '.join(STYLES)}") from None


def is_absolute(path: PathLike, *, style: Optional[str] = None) -> bool:
    """True when ``path`` starts at a root separator.

    ``C:foo`` (drive-relative) is not absolute; ``\\foo`` on Windows is.
    """
    return bool(flavour_for(style)(os.fspath(path)).root)


def normalize(path: PathLike, *, style: Optional[str] = None) -> str:
    """Return the canonical string form of ``path`` for ``style``."""
    return str(flavour_for(style)(os.fspath(path)))


def split_path(path: PathLike, *, style: Optional[str] = None, no_file: bool = False) -> SplitPath:
    """Split ``path`` into volume, root marker, directories and file component.

    With ``no_file`` the whole path is treated as directories and the file
    component is empty.
    """
    pure = flavour_for(style)(os.fspath(path))
    segments = pure.parts[1:] if pure.anchor else pure.parts
    if no_file or not segments:
        return SplitPath(volume=pure.drive, root=pure.root, directories=tuple(segments))
    return SplitPath(
        volume=pure.drive,
        root=pure.root,
        directories=tuple(segments[:-1]),
        file=segments[-1],
    )


def split_relative(relative: RelativeLike, *, style: Optional[str] = None) -> Tuple[str, ...]:
    """Split a relative path into its directory segments.

    Accepts a path string or an already split segment sequence. Empty and
    ``.`` segments are dropped; ``..`` is kept verbatim.

    Raises:
        InvalidRelativePathError: If ``relative`` is absolute or empty.
    """
    flavour = flavour_for(style)
    if isinstance(relative, (list, tuple)):
        pure = flavour(*relative) if relative else flavour()
    else:
        pure = flavour(os.fspath(relative))  # type: ignore[arg-type]

    if pure.root or pure.drive:
        raise InvalidRelativePathError(
            f"Expected a relative path, got '{pure}'",
            context={"path": str(pure)},
        )
    segments = tuple(p for p in pure.parts if p not in ("", "."))
    if not segments:
        raise InvalidRelativePathError("Relative path is empty", context={"path": str(relative)})
    return segments


def concat_path(
    root: PathLike,
    relative: RelativeLike,
    *,
    style: Optional[str] = None,
    root_has_file: bool = False,
) -> str:
    """Join a root location and a relative path structurally.

    Args:
        root: Root location (directory; may carry a volume prefix).
        relative: Relative path string or segment sequence.
        style: ``"posix"``, ``"windows"`` or ``None``/``"native"``.
        root_has_file: Treat the root's last segment as a file component and
            keep it at the end of the result.

    Example:
        >>> concat_path("C:\\\\templates\\\\c", "sub/test.tt", style="windows")
        'C:\\\\templates\\\\c\\\\sub\\\\test.tt'
    """
    base = split_path(root, style=style, no_file=not root_has_file)
    segments = base.directories + split_relative(relative, style=style)
    if base.file:
        segments += (base.file,)
    return str(flavour_for(style)(base.anchor, *segments))


__all__ = [
    "STYLES",
    "SplitPath",
    "flavour_for",
    "is_absolute",
    "normalize",
    "split_path",
    "split_relative",
    "concat_path",
]
