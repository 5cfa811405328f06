"""
Formatting helpers for human-readable console output.
"""


def elapsedTime(t):
    """
    Format a duration in seconds with a fitting unit.

    Example:
        elapsedTime(0.05) -> "   50 ms"
        elapsedTime(125.5) -> "2.092 m"
    """
    if t < 1.0:
        return "%5.4g ms" % (t * 1000.0)
    elif t < 60.0:
        return "%5.4g s" % (t)
    elif t < 3600.0:
        return "%5.4g m" % (t / 60.0)
    else:
        return "%5.4g h" % (t / 3600.0)


def memorySize(sz):
    """
    Format a size in bytes with a fitting binary unit, e.g. "1.5 MB".
    """
    for unit in ("B", "KB", "MB", "GB"):
        if sz < 1024:
            return "%5.4g %s" % (sz, unit)
        sz /= 1024.0
    return "%5.4g TB" % (sz,)


def formatValues(values):
    """Join analysis values for a one-line listing; strings stay unquoted."""
    return ", ".join(str(value) for value in values)
