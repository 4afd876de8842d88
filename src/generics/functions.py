"""Generic function implementations"""

import inspect, itertools, logging
from inspect import Parameter
from zope.interface import implementer
from generics.interfaces import *
from generics.classes import resolve_class, ancestors, LegacyClass, NULL, \
    MISSING, MISSING_ARG
from generics.strategy import DispatchFrame, candidate_paths, table_paths, \
    ancestry_of
from generics.combiners import invoke, takes_next_method
from generics.promises import force
from generics import legacy

__all__ = [
    'GenericFunction', 'new_generic', 'generic', 'register_method',
    'find_method', 'methods_list', 'explain',
]

log = logging.getLogger(__name__)

_VARIADIC = Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD


def _default_formals(signature):
    params = [Parameter(n, Parameter.POSITIONAL_OR_KEYWORD) for n in signature]
    params.append(Parameter('args', Parameter.VAR_POSITIONAL))
    params.append(Parameter('kw', Parameter.VAR_KEYWORD))
    return inspect.Signature(params)


@implementer(IGenericFunction)
class GenericFunction(object):

    """Extensible multi-dispatch generic function

    'signature' names the arguments dispatched on, in order of precedence.
    'fun', if supplied, only contributes its parameter list and docstring;
    without it, the generic takes the dispatch arguments followed by any
    other positional or keyword arguments, which are passed to the method
    unchanged.
    """

    def __init__(self, name, signature, fun=None, package=None, registry=None):

        if isinstance(signature, str):
            signature = signature,
        signature = tuple(signature)

        if not name or not isinstance(name, str):
            raise DefinitionError("Generic name must be a non-empty string")
        if not signature:
            raise DefinitionError(
                "Generic %s must dispatch on at least one argument" % name
            )
        if len(dict.fromkeys(signature)) != len(signature):
            raise DefinitionError(
                "Generic %s dispatches on the same argument twice" % name
            )

        if fun is None:
            formals = _default_formals(signature)
        else:
            formals = inspect.signature(fun)
        for arg in signature:
            param = formals.parameters.get(arg)
            if param is None or param.kind in _VARIADIC:
                raise DefinitionError(
                    "Generic %s can't dispatch on %r: not a named parameter"
                    % (name, arg)
                )

        if registry is None:
            from generics.registry import get_registry
            registry = get_registry()

        self.name = self.__name__ = name
        self.__doc__ = fun is not None and fun.__doc__ or None
        self.signature = signature
        self.formals = formals
        self.package = package
        self.registry = registry
        self.methods = {}
        self.chained = {}
        registry.addGeneric(self)


    def __call__(self, *args, **kw):
        frame = DispatchFrame(self, args, kw, self.dispatchValues(args, kw))
        found = frame.nextAfter(-1)
        if found is None:
            return self._fallback(frame)
        index, path, method = found
        return invoke(frame, index, method, args, kw)


    def dispatchValues(self, args, kw):
        """Return the values of the dispatch arguments in 'args' and 'kw'"""
        arguments = self.formals.bind_partial(*args, **kw).arguments
        return [arguments.get(name, MISSING_ARG) for name in self.signature]


    def _fallback(self, frame):

        value = force(frame.values[0])
        registry = self.registry

        ranked = registry.legacy.ranked_classes(value)
        method = registry.legacy.lookup_legacy_method(self.name, ranked)
        if method is None:
            method = registry.legacy2.lookup_legacy_method2(
                self.name, ranked[0]
            )
        if method is None:
            raise NoApplicableMethodError(self.name, frame.classes())

        log.debug("%s: no native method for %r, using legacy %r",
            self.name, frame.classes(), method
        )
        return method(*frame.args, **frame.kw)


    def addMethod(self, classes, method):
        """Call 'method' when the dispatch arguments match 'classes'

        'classes' has one class per dispatch argument (a single class may be
        given as-is when there's only one).  A union stands for each of its
        members.  Registering a method for an existing signature replaces
        the old one.
        """

        if not callable(method):
            raise DefinitionError("%r is not callable" % (method,))

        if not isinstance(classes, (list, tuple)):
            classes = classes,
        if len(classes) != len(self.signature):
            raise DefinitionError(
                "%s() dispatches on %d argument(s), but %d class(es) given"
                % (self.name, len(self.signature), len(classes))
            )

        keys = [resolve_class(c).keys() for c in classes]
        for path in itertools.product(*keys):
            self._store(path, method)

        if takes_next_method(method):
            self.chained[id(method)] = method


    def _store(self, path, method):
        node = self.methods
        for name in path[:-1]:
            node = node.setdefault(name, {})
        if path[-1] in node:
            log.debug("%s%r: replacing %r", self.name, path, node[path[-1]])
        node[path[-1]] = method
        log.debug("%s%r: registered %r", self.name, path, method)


    def when(self, *classes):
        """Add the following function to this generic, for 'classes'"""
        def decorate(method):
            self.addMethod(classes, method)
            return method
        return decorate


    def methodsList(self):
        return list(table_paths(self.methods, len(self.signature)))


    def __repr__(self):
        return '<GenericFunction %s(%s) with %d methods>' % (
            self.name, ', '.join(self.signature), len(self.methodsList())
        )



def new_generic(name, signature, fun=None, package=None, registry=None):
    """Create a generic function dispatching on 'signature'"""
    return GenericFunction(name, signature, fun, package, registry)


def generic(*signature, **kw):
    """Decorator: turn a prototype function into a generic function

    E.g.::

        @generic('x', 'y')
        def bar(x, y, *args):
            "Combine 'x' and 'y'"
    """
    def decorate(fun):
        return GenericFunction(fun.__name__, signature, fun, **kw)
    return decorate


def register_method(generic, signature_classes, method, registry=None):
    """Register 'method' with 'generic' for 'signature_classes'

    'generic' can be a generic function, an external generic (in which case
    registration is deferred until its component is flushed), or a legacy
    generic: a plain function or a name, for which the method is added to
    the registry's single-dispatch legacy method table.
    """

    from generics.external import ExternalGeneric

    if isinstance(generic, ExternalGeneric):
        return generic.defer(signature_classes, method, registry)

    if IGenericFunction.providedBy(generic):
        generic.addMethod(signature_classes, method)
        return method

    if isinstance(generic, str) or callable(generic):
        name = isinstance(generic, str) and generic \
            or getattr(generic, '__name__', None)
        if not name:
            raise DefinitionError("%r is not a generic function" % (generic,))
        classes = signature_classes
        if not isinstance(classes, (list, tuple)):
            classes = classes,
        if len(classes) != 1:
            raise DefinitionError(
                "Legacy generic %s can only dispatch on one argument" % name
            )
        if registry is None:
            from generics.registry import get_registry
            registry = get_registry()
        for key in resolve_class(classes[0]).keys():
            if key == legacy.ROOT:
                key = 'default'
            registry.legacy.register(name, key, method)
        return method

    raise DefinitionError("%r is not a generic function" % (generic,))


def _class_names(ob):

    ob = resolve_class(ob)

    if IClassObject.providedBy(ob):
        return tuple([c.name for c in ancestors(ob)])

    if isinstance(ob, LegacyClass):
        if ob.pytype is None or ob in (NULL, MISSING):
            return legacy.LegacyNamed(ob.name).names
        return legacy.LegacyRanked([t.__name__ for t in ob.pytype.__mro__]).names

    raise DefinitionError("Can't look up methods for %r" % (ob,))


def find_method(generic, classes):
    """Return the method 'generic' would use for arguments of 'classes'

    Returns 'None' if no native method applies.
    """
    if not isinstance(classes, (list, tuple)):
        classes = classes,
    if len(classes) != len(generic.signature):
        raise DefinitionError(
            "%s() dispatches on %d argument(s), but %d class(es) given"
            % (generic.name, len(generic.signature), len(classes))
        )
    ancestry = [_class_names(c) for c in classes]
    for path, method in candidate_paths(generic.methods, ancestry):
        return method
    return None


def methods_list(generic):
    """Return '[(path, method), ...]' for every method of 'generic'"""
    return generic.methodsList()


def explain(generic, *args, **kw):
    """Describe how a call of 'generic' with 'args' and 'kw' is dispatched

    Every combination of the arguments' classes is listed, in the order
    they're tried.  Combinations with a method are marked '->', and the
    one that would be called is marked '=>'.
    """

    registry = generic.registry
    ancestry = [
        ancestry_of(registry, v) for v in generic.dispatchValues(args, kw)
    ]

    selected = None
    for path, method in candidate_paths(generic.methods, ancestry):
        selected = path
        break

    lines = []
    for path in itertools.product(*ancestry):
        node = generic.methods
        for name in path:
            node = node.get(name)
            if node is None:
                break
        if path == selected:
            marker = '=>'
        elif node is not None:
            marker = '->'
        else:
            marker = '  '
        lines.append('%s %s(%s)' % (marker, generic.name, ', '.join(path)))
    return '\n'.join(lines)
