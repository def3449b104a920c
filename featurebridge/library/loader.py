"""Load step-definition modules and let them register their steps."""
from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from featurebridge.errors import StepLibraryError

if TYPE_CHECKING:
    from types import ModuleType

    from featurebridge.library.dictionary import Dictionary
    from featurebridge.library.steps import StepLibrary

logger = logging.getLogger(__name__)

ENTRY_POINT = "define_steps"


def _load_file(py_file: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"featurebridge_steps.{py_file.stem}", py_file)
    if not spec or not spec.loader:
        raise StepLibraryError(f"Cannot load step module: {py_file}")
    mod = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = mod
    spec.loader.exec_module(mod)
    return mod


def resolve_step_modules(identifier: str, base_dir: Path) -> list[ModuleType]:
    """Directory -> every public ``*.py`` in it; file -> that file; else a dotted import."""
    candidate = base_dir / identifier
    if candidate.is_dir():
        return [_load_file(p) for p in sorted(candidate.glob("*.py")) if not p.name.startswith("_")]
    if candidate.suffix == ".py" and candidate.is_file():
        return [_load_file(candidate)]
    if candidate.with_name(candidate.name + ".py").is_file():
        return [_load_file(candidate.with_name(candidate.name + ".py"))]

    try:
        return [importlib.import_module(identifier)]
    except ModuleNotFoundError as e:
        raise StepLibraryError(f"Step module not found: {identifier} (searched {base_dir})") from e


def load_step_modules(
    identifiers: list[str],
    library: StepLibrary,
    dictionary: Dictionary,
    base_dir: str | Path,
) -> int:
    """Import each step module and call its ``define_steps(library, dictionary)``."""
    loaded = 0
    for identifier in identifiers:
        for mod in resolve_step_modules(identifier, Path(base_dir)):
            define = getattr(mod, ENTRY_POINT, None)
            if not callable(define):
                raise StepLibraryError(f"Step module {mod.__name__} has no {ENTRY_POINT}(library, dictionary)")
            define(library, dictionary)
            loaded += 1
            logger.debug("Loaded step module %s", mod.__name__)
    logger.info("Loaded %d step module(s), %d step definition(s)", loaded, len(library.macros))
    return loaded
