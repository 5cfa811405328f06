"""
DOT graph output.

A minimal Graphviz writer: a Digraph holds nodes and edges with attribute
dictionaries and serialises itself in DOT syntax. Rendering to an image goes
through the external `dot` executable.
"""
import io
import re
import shutil
import subprocess

__all__ = "Digraph", "Style", "compileDot"

# Characters that need escaping inside a quoted DOT field.
makeescape = re.compile(r"[\n\t\"]")

lut = {"\n": r"\n", "\t": r"\t", '"': r"\""}


def escapeField(s):
    return makeescape.sub(lambda c: lut[c.group()], str(s))


def dumpAttr(attr, out):
    """Write attributes as [key1="value1", key2="value2"]."""
    out.write(" [")
    out.write(
        ", ".join('%s="%s"' % (k, escapeField(v)) for k, v in attr.items())
    )
    out.write("]")


def Style(**kargs):
    """Attribute dictionary for node or edge defaults; values must be strings."""
    for k, v in kargs.items():
        assert type(k) == str and type(v) == str
    return kargs


class Node(object):
    """A named node with display attributes."""
    __slots__ = ("name", "attr")

    def __init__(self, name, **attr):
        assert isinstance(name, str)
        self.name = name
        self.attr = attr

    def dump(self, out, tabs=""):
        out.write('%s"%s"' % (tabs, escapeField(self.name)))
        if self.attr:
            dumpAttr(self.attr, out)
        out.write(";\n")


class Edge(object):
    """A directed edge between two node names."""
    __slots__ = ("source", "target", "attr")

    def __init__(self, source, target, **attr):
        self.source = source
        self.target = target
        self.attr = attr

    def dump(self, out, tabs=""):
        out.write(
            '%s"%s" -> "%s"'
            % (tabs, escapeField(self.source), escapeField(self.target))
        )
        if self.attr:
            dumpAttr(self.attr, out)
        out.write(";\n")


class Digraph(object):
    """
    A directed graph in DOT form.

    Nodes are kept in insertion order, so the output is deterministic for a
    deterministic construction order.

    Attributes:
        name: Graph name.
        attr: Graph-level attributes.
        nodetype: Default node attributes (emitted as a `node [...]` line).
        edgetype: Default edge attributes (emitted as an `edge [...]` line).
    """
    __slots__ = ("name", "attr", "nodetype", "edgetype", "nodes", "edges", "nameLUT")

    def __init__(self, name="G", nodetype=None, edgetype=None, **attr):
        self.name = name
        self.attr = attr
        self.nodetype = nodetype
        self.edgetype = edgetype
        self.nodes = []
        self.edges = []
        self.nameLUT = {}

    def node(self, name, **attr):
        name = str(name)
        assert name not in self.nameLUT, name
        n = Node(name, **attr)
        self.nodes.append(n)
        self.nameLUT[name] = n
        return n

    def edge(self, n1, n2, **attr):
        e = Edge(str(n1), str(n2), **attr)
        self.edges.append(e)
        return e

    def outputDot(self, out):
        indent = "\t"
        out.write('digraph "%s" {\n' % escapeField(self.name))

        for k, v in self.attr.items():
            out.write('%s%s = "%s";\n' % (indent, k, escapeField(v)))

        if self.nodetype:
            out.write("%snode" % indent)
            dumpAttr(self.nodetype, out)
            out.write(";\n")

        if self.edgetype:
            out.write("%sedge" % indent)
            dumpAttr(self.edgetype, out)
            out.write(";\n")

        for n in self.nodes:
            n.dump(out, indent)

        for e in self.edges:
            assert e.source in self.nameLUT, e.source
            assert e.target in self.nameLUT, e.target
            e.dump(out, indent)

        out.write("}\n")

    def toDot(self):
        out = io.StringIO()
        self.outputDot(out)
        return out.getvalue()


def compileDot(source, format="svg", executable=None):
    """
    Render DOT source with Graphviz and return the rendered bytes.

    Args:
        source: DOT text.
        format: Graphviz output format (svg, png, pdf, ...).
        executable: Path to `dot`; looked up on PATH when omitted.

    Raises:
        FileNotFoundError: If no Graphviz executable is available.
        subprocess.CalledProcessError: If Graphviz rejects the input.
    """
    dot = executable or shutil.which("dot")
    if dot is None:
        raise FileNotFoundError("Graphviz 'dot' executable not found on PATH")

    result = subprocess.run(
        [dot, "-T" + format],
        input=source.encode("utf-8"),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=True,
    )
    return result.stdout
