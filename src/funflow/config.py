"""Solver configuration.

Settings come from the `[solver]` table of a `funflow.toml` file, looked up
in the working directory unless a path is given, and can be overridden from
the command line:

    [solver]
    max_steps = 100000
    timeout = 30.0
    rss_limit_mb = 2048

Every limit is optional; an absent limit means the drain is unbounded in
that dimension.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from funflow.analysis.constraints.budget import Budget

DEFAULT_CONFIG_NAME = "funflow.toml"


def _load_toml(path: Path) -> dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    data = tomllib.loads(raw)
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> dict:
    """Parse the configuration file; a missing file is an empty table."""
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(Path(config_path))


def solver_defaults(root: Path | None = None, config_path: Path | None = None) -> dict:
    data = load_config(root=root, config_path=config_path)
    section = data.get("solver", {})
    return section if isinstance(section, dict) else {}


def _positive(name, value, kind):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError("solver.%s must be a number, got %r" % (name, value))
    if value <= 0:
        raise ValueError("solver.%s must be positive, got %r" % (name, value))
    return value


@dataclass(frozen=True)
class SolverConfig:
    """
    Drain limits of a solve.

    Attributes:
        max_steps: Maximum number of worklist steps.
        timeout: Maximum drain time in seconds.
        rss_limit_mb: Maximum resident memory of the process in MB.
    """
    max_steps: int | None = None
    timeout: float | None = None
    rss_limit_mb: int | None = None

    def __post_init__(self):
        _positive("max_steps", self.max_steps, int)
        _positive("timeout", self.timeout, (int, float))
        _positive("rss_limit_mb", self.rss_limit_mb, int)

    @classmethod
    def from_section(cls, section: dict) -> "SolverConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError("Unknown solver settings: %s" % ", ".join(unknown))
        return cls(**section)

    @classmethod
    def load(cls, root: Path | None = None, config_path: Path | None = None) -> "SolverConfig":
        return cls.from_section(solver_defaults(root=root, config_path=config_path))

    def override(self, **kargs) -> "SolverConfig":
        """Return a copy with every non-None keyword replacing its setting."""
        return replace(self, **{k: v for k, v in kargs.items() if v is not None})

    def budget(self) -> Budget | None:
        """Budget for a drain, or None when no limit is set."""
        budget = Budget(self.max_steps, self.timeout, self.rss_limit_mb)
        return None if budget.unlimited else budget
