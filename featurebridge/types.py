from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

# ─── Feature IR (produced by the parser) ───

@dataclass
class Scenario:
    title: str
    annotations: dict[str, Any] = field(default_factory=dict)
    steps: list[str] = field(default_factory=list)  # "Given ...", "When ...", literal text

@dataclass
class Feature:
    title: str
    annotations: dict[str, Any] = field(default_factory=dict)
    scenarios: list[Scenario] = field(default_factory=list)
    description: str = ""
    path: Path | None = None

# ─── Load configuration ───

DEFAULT_LANG = "default"
DEFAULT_STEPS = "steps"
DEFAULT_TIMEOUT = 30.0  # seconds

@dataclass
class BridgeConfig:
    lang: str = DEFAULT_LANG
    steps: list[str] = field(default_factory=lambda: [DEFAULT_STEPS])
    timeout: float = DEFAULT_TIMEOUT
