"""Dependency graph of a solver's entries.

Every reference or dynamic rule adds edges from the entries it reads to the
entry it writes. Strongly connected components of this graph (and entries
feeding themselves) are the places where the drain iterates until the values
stop changing; acyclic parts are settled after one pass.
"""

import networkx as nx

__all__ = ["dependencyGraph", "recursiveComponents"]


def dependencyGraph(solver):
    """
    Build the entry dependency graph.

    Args:
        solver: A Solver with its rules defined.

    Returns:
        nx.DiGraph whose nodes are entry names. An edge a -> b carries the ids
        of the rules through which entry a feeds entry b in its "rules"
        attribute.
    """
    g = nx.DiGraph()
    for entry in solver.store:
        g.add_node(entry.name, category=entry.category, key=entry.key)

    for rule in solver.table:
        for dependency in rule.dependencies:
            if g.has_edge(dependency.name, rule.rhs.name):
                g.edges[dependency.name, rule.rhs.name]["rules"].append(rule.id)
            else:
                g.add_edge(dependency.name, rule.rhs.name, rules=[rule.id])
    return g


def recursiveComponents(graph):
    """Return the entry sets that depend on themselves, largest first.

    A component qualifies if it has more than one entry or its single entry
    has a self loop. Names inside a component are sorted.
    """
    components = []
    for component in nx.strongly_connected_components(graph):
        if len(component) > 1:
            components.append(sorted(component))
        else:
            (name,) = component
            if graph.has_edge(name, name):
                components.append([name])
    components.sort(key=lambda c: (-len(c), c))
    return components
