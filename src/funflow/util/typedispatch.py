"""Type-based dispatch for tree walkers.

A TypeDispatcher subclass routes a call to the handler registered for the
runtime type of its first argument. The AST visitors of funflow (scope
resolution, evaluation, diagram output) and the reference/rule translators of
the constraint solver are written as dispatchers, so each node or reference
variant gets its own small method instead of one long isinstance chain.
"""

__all__ = [
    "TypeDispatcher",
    "defaultdispatch",
    "dispatch",
    "TypeDispatchError",
    "TypeDispatchDeclarationError",
]

import inspect


class TypeDispatchError(Exception):
    """Raised when a dispatcher is called with a type it cannot handle."""
    pass


class TypeDispatchDeclarationError(Exception):
    """Raised at class creation time for an inconsistent dispatch table."""
    pass


def flattenTypesInto(types, result):
    for child in types:
        if isinstance(child, (list, tuple)):
            flattenTypesInto(child, result)
        else:
            if not isinstance(child, type):
                raise TypeDispatchDeclarationError(
                    "Expected a type, got %r instead." % (child,)
                )
            result.append(child)


def dispatch(*types):
    """Register the decorated method as the handler for the given types.

    Args:
        *types: Types (or nested lists/tuples of types) handled by the method.

    Returns:
        Decorator marking the method for the dispatch table.
    """
    def dispatchF(f):
        def dispatchWrap(*args, **kargs):
            return f(*args, **kargs)

        dispatchWrap.__original__ = f
        dispatchWrap.__dispatch__ = []
        flattenTypesInto(types, dispatchWrap.__dispatch__)
        return dispatchWrap

    return dispatchF


def defaultdispatch(f):
    """Register the decorated method as the fallback handler."""
    def defaultWrap(*args, **kargs):
        return f(*args, **kargs)

    defaultWrap.__original__ = f
    defaultWrap.__dispatch__ = (None,)
    return defaultWrap


def dispatch__call__(self, p, *args):
    t = type(p)
    table = self.__typeDispatchTable__

    func = table.get(t)

    if func is None:
        # Walk the MRO once per new type, then cache the result.
        possible = (t,) if self.__concrete__ else t.mro()

        for supercls in possible:
            func = table.get(supercls)
            if func is not None:
                break

        if func is None:
            func = table.get(None)

        table[t] = func

    return func(self, p, *args)


def exceptionDefault(self, node, *args):
    raise TypeDispatchError("%r cannot handle %r\n%r" % (type(self), type(node), node))


def inlineAncestor(t, lut):
    if hasattr(t, "__typeDispatchTable__"):
        # Handlers declared by the subclass win over inherited ones.
        for k, v in t.__typeDispatchTable__.items():
            if k not in lut:
                lut[k] = v


class typedispatcher(type):
    """Metaclass collecting @dispatch handlers into __typeDispatchTable__."""

    def __new__(self, name, bases, d):
        lut = {}
        restore = {}

        for k, v in d.items():
            if hasattr(v, "__dispatch__") and hasattr(v, "__original__"):
                for t in v.__dispatch__:
                    if t in lut:
                        raise TypeDispatchDeclarationError(
                            "%s has declared with multiple handlers for type %s"
                            % (name, t.__name__)
                        )
                    lut[t] = v.__original__
                restore[k] = v.__original__

        d.update(restore)

        for base in bases:
            for t in inspect.getmro(base):
                inlineAncestor(t, lut)

        if None not in lut:
            raise TypeDispatchDeclarationError("%s has no default dispatch" % (name,))

        d["__typeDispatchTable__"] = lut

        return type.__new__(self, name, bases, d)


class TypeDispatcher(object, metaclass=typedispatcher):
    """Base class for dispatchers.

    Example:
        >>> class Describe(TypeDispatcher):
        ...     @dispatch(int)
        ...     def visitInt(self, obj):
        ...         return "integer"
        ...     @defaultdispatch
        ...     def visitOther(self, obj):
        ...         return "other"
        >>> Describe()(42)
        'integer'

    Attributes:
        __concrete__: If True, only exact type matches are considered.
    """
    __dispatch__ = dispatch__call__
    __call__ = dispatch__call__
    exceptionDefault = defaultdispatch(exceptionDefault)
    __concrete__ = False
