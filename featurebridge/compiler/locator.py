"""Find feature files beneath a resource path."""
from __future__ import annotations

import os
from pathlib import Path

FEATURE_SUFFIXES = frozenset({".feature", ".spec", ".specification"})


def locate_features(path: str | Path) -> list[Path]:
    """Return the feature files for a resource.

    A directory is searched recursively. Anything that is not a directory is
    taken as a single feature file; other file-system errors propagate.
    """
    resource = Path(path)
    try:
        os.listdir(resource)
    except NotADirectoryError:
        return [resource]
    return sorted(
        p for p in resource.rglob("*")
        if p.suffix in FEATURE_SUFFIXES and p.is_file()
    )
