"""Locating rule sets by name or path.

A rule set is a callable taking an Environment. The built-in ones are
registered by name; anything else is treated as the path of a Python rule
script. A script runs with the rule-authoring API already in its globals:

    for node in type("n"):
        define(Rule(Constant(node.value), ExpressionReference(node)))

Scripts are ordinary Python and run with the full privileges of the host.
"""

import logging
import os
import runpy

from .cfa import cfa
from .signs import signs

__all__ = ["BUILTIN", "loadRuleset", "scriptRuleset", "combine"]

LOG = logging.getLogger(__name__)

BUILTIN = {
    "cfa": cfa,
    "signs": signs,
}


def scriptRuleset(path):
    """Wrap a rule script into a rule set callable."""
    path = os.fspath(path)

    def ruleset(env):
        LOG.info("running rule script %s", path)
        runpy.run_path(path, init_globals=env.namespace(), run_name="__funflow_rules__")

    ruleset.__name__ = os.path.basename(path)
    return ruleset


def loadRuleset(nameOrPath):
    """
    Resolve a rule set.

    Args:
        nameOrPath: A built-in rule set name ("cfa", "signs") or the path of
            a rule script.

    Returns:
        A callable taking an Environment.

    Raises:
        FileNotFoundError: The argument is neither a built-in name nor an
            existing file.
    """
    if nameOrPath in BUILTIN:
        return BUILTIN[nameOrPath]
    if not os.path.isfile(nameOrPath):
        raise FileNotFoundError(
            "No rule set named %r and no such file (built-in rule sets: %s)"
            % (nameOrPath, ", ".join(sorted(BUILTIN)))
        )
    return scriptRuleset(nameOrPath)


def combine(rulesets):
    """A rule set running several rule sets in order."""
    rulesets = tuple(rulesets)

    def combined(env):
        for ruleset in rulesets:
            ruleset(env)

    return combined
