"""TOML config loading for arith.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

MODES = ("eval", "rpn", "ast", "format")


@dataclass
class ReplConfig:
    prompt: str = "> "
    mode: str = "eval"


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class ArithConfig:
    repl: ReplConfig = field(default_factory=ReplConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find arith.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / "arith.toml"
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError("No arith.toml found in any parent directory")
        path = parent


def load_config(path: Path) -> ArithConfig:
    """Parse an arith.toml file into an ArithConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = ArithConfig()

    if "repl" in data:
        repl = data["repl"]
        prompt = repl.get("prompt", "> ")
        if not isinstance(prompt, str):
            raise ValueError(f"repl.prompt must be a string, not {prompt!r}")
        mode = repl.get("mode", "eval")
        if mode not in MODES:
            raise ValueError(f"unknown repl mode {mode!r}; expected one of {', '.join(MODES)}")
        config.repl = ReplConfig(
            prompt=prompt,
            mode=mode,
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        color = diag.get("color", True)
        if not isinstance(color, bool):
            raise ValueError(f"diagnostics.color must be true or false, not {color!r}")
        config.diagnostics = DiagnosticsConfig(
            color=color,
        )

    return config
