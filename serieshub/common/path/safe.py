# serieshub/common/path/safe.py
from __future__ import annotations

from pathlib import Path, PurePosixPath


def resolve_root(root: Path | str) -> Path:
    """Absolute, symlink-resolved form of a storage root."""
    return Path(root).expanduser().resolve()


def safe_join(root: Path | str, rel: Path | str) -> Path:
    """
    Join 'root' and a relative path, refusing anything that resolves outside
    'root' (``..`` segments, absolute paths, symlinks pointing away).
    Raises ValueError on escape.
    """
    r = resolve_root(root)
    p = (r / str(rel)).resolve()
    if p != r and r not in p.parents:
        raise ValueError(f"path {p} escapes root {r}")
    return p


def public_to_relative(public_path: str) -> str:
    """
    Turn a stored public path such as "/img/tarjeta/12_1700000000000.jpg"
    into a path relative to the upload root ("img/tarjeta/12_....jpg").
    """
    s = (public_path or "").strip()
    if not s:
        raise ValueError("empty image path")
    return str(PurePosixPath(s.lstrip("/")))
