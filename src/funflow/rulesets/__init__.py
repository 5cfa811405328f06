"""Rule sets: predefined analyses and user rule scripts."""

from .cfa import cfa
from .signs import signs
from .loader import BUILTIN, loadRuleset, scriptRuleset, combine

__all__ = ["cfa", "signs", "BUILTIN", "loadRuleset", "scriptRuleset", "combine"]
