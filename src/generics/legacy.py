"""Interoperation with the host's own object systems

    NativeClass, LegacyRanked, LegacyNamed -- the three 'IClassSource'
        variants: a native class, an ordinary Python class (known by its
        ranked MRO names), and a value known only by a single class name

    declareClassSource, class_source -- adapt any value to 'IClassSource',
        using a 'zope.interface' adapter registry keyed by the value's type
        or provided interfaces

    SingleDispatchTable, DoubleDispatchTable -- name-keyed legacy method
        tables, consulted when no native method applies
"""

import logging
from zope.interface import implementer, implementedBy, providedBy, Interface
from zope.interface.adapter import AdapterRegistry
from generics.interfaces import *
from generics.classes import BASE_CLASSES, MISSING_ARG

__all__ = [
    'NativeClass', 'LegacyRanked', 'LegacyNamed', 'sources',
    'declareClassSource', 'class_source', 'SingleDispatchTable',
    'DoubleDispatchTable', 'ROOT',
]

log = logging.getLogger(__name__)

ROOT = 'any'


@implementer(IClassSource)
class NativeClass(object):

    """Class source for instances of a native (or base) class"""

    __slots__ = 'klass', 'names'

    def __init__(self, klass):
        self.klass = klass
        self.names = tuple([c.name for c in klass.ancestors()])

    def __repr__(self):
        return 'NativeClass(%s)' % self.klass.name


@implementer(IClassSource)
class LegacyRanked(object):

    """Class source for objects of a single-dispatch system

    'ranked' is the system's own class vector, most specific first; its
    universal root (e.g. 'object') is replaced by the native root.
    """

    __slots__ = 'ranked', 'names'

    def __init__(self, ranked):
        self.ranked = tuple(ranked)
        names = [n for n in self.ranked[:-1] if n != ROOT]
        if self.ranked and self.ranked[-1] not in ('object', ROOT):
            names.append(self.ranked[-1])
        names.append(ROOT)
        self.names = tuple(names)

    def __repr__(self):
        return 'LegacyRanked(%r)' % (self.ranked,)


@implementer(IClassSource)
class LegacyNamed(object):

    """Class source for values known only by one class name"""

    __slots__ = 'name', 'names'

    def __init__(self, name):
        self.name = name
        self.names = (name, ROOT)

    def __repr__(self):
        return 'LegacyNamed(%r)' % self.name



sources = AdapterRegistry()


def declareClassSource(factory, forTypes=(), forInterfaces=(), registry=None):
    """Declare that 'factory(value)' returns the 'IClassSource' of 'value'

    'forTypes' are Python types whose instances the factory handles;
    'forInterfaces' are interfaces such values provide.  The most specific
    declaration wins, so declarations for a subclass override those for its
    bases.
    """

    if registry is None:
        registry = sources
    for typ in forTypes:
        registry.register([implementedBy(typ)], IClassSource, '', factory)
    for iface in forInterfaces:
        registry.register([iface], IClassSource, '', factory)


def class_source(value, registry=None):
    """Return the 'IClassSource' for 'value'"""

    if registry is None:
        registry = sources
    factory = registry.lookup1(providedBy(value), IClassSource)
    if factory is None:
        raise InternalError("No class source for %r" % (value,))
    return factory(value)


def _constant(source):
    return lambda value: source


def _mro_source(value):
    return LegacyRanked([c.__name__ for c in type(value).__mro__])


declareClassSource(_mro_source, forInterfaces=[Interface])

declareClassSource(
    lambda ob: NativeClass(ob.klass), forInterfaces=[IObjectInstance]
)

for _klass in BASE_CLASSES.values():
    _types = _klass.pytype
    if not isinstance(_types, tuple):
        _types = _types,
    declareClassSource(_constant(NativeClass(_klass)), forTypes=_types)

declareClassSource(_constant(LegacyNamed('NULL')), forTypes=[type(None)])
declareClassSource(_constant(LegacyNamed('missing')), forTypes=[type(MISSING_ARG)])

del _klass, _types



@implementer(ILegacySingleDispatch)
class SingleDispatchTable(object):

    """Single-dispatch legacy methods, keyed by '(generic name, class name)'

    Lookup tries each of the value's ranked classes in order, then the
    class name '"default"'.
    """

    def __init__(self, adapters=None):
        self.adapters = adapters
        self.methods = {}

    def register(self, name, classname, method):
        log.debug("Legacy method %s.%s registered", name, classname)
        self.methods[name, classname] = method

    def ranked_classes(self, value):
        names = list(class_source(value, self.adapters).names)
        names[-1] = 'object'
        return tuple(names)

    def lookup_legacy_method(self, name, ranked_classes):
        get = self.methods.get
        for classname in ranked_classes:
            method = get((name, classname))
            if method is not None:
                return method
        return get((name, 'default'))


@implementer(ILegacyDoubleDispatch)
class DoubleDispatchTable(object):

    """Legacy methods looked up by exact class name, falling back to "ANY" """

    def __init__(self):
        self.methods = {}

    def register(self, name, classname, method):
        log.debug("Legacy method %s(%s) registered", name, classname)
        self.methods[name, classname] = method

    def lookup_legacy_method2(self, name, classname):
        method = self.methods.get((name, classname))
        if method is None:
            method = self.methods.get((name, 'ANY'))
        return method
