"""Registry of classes, generic functions and class sources

 Everything that defines a class or generic function records it in a
 'Registry'.  Most programs use the single default registry returned by
 'get_registry()'; tests create their own isolated 'Registry()' instances.
"""

import logging
from zope.interface.adapter import AdapterRegistry
from generics.interfaces import *
from generics import legacy

__all__ = ['Registry', 'get_registry', 'set_registry']

log = logging.getLogger(__name__)


class Registry(object):

    """Class, generic function and class-source tables

    'legacy_single' and 'legacy_double' are the 'ILegacySingleDispatch' and
    'ILegacyDoubleDispatch' collaborators used when no native method
    applies; by default, empty name-keyed method tables are used.
    """

    def __init__(self, legacy_single=None, legacy_double=None):
        self.classes = {}
        self.generics = {}
        self.pending = []
        self.adapters = AdapterRegistry((legacy.sources,))
        if legacy_single is None:
            legacy_single = legacy.SingleDispatchTable(self.adapters)
        if legacy_double is None:
            legacy_double = legacy.DoubleDispatchTable()
        self.legacy = legacy_single
        self.legacy2 = legacy_double


    def addClass(self, klass):
        if klass.name in self.classes:
            log.debug("Redefining class <%s>", klass.name)
        self.classes[klass.name] = klass


    def getClass(self, name, default=None):
        return self.classes.get(name, default)


    def addGeneric(self, generic):
        key = generic.package, generic.name
        if key in self.generics:
            log.debug("Redefining generic %s", generic.name)
        self.generics[key] = generic


    def getGeneric(self, name, package=None, default=None):
        """Return generic 'name' defined by component 'package'"""
        return self.generics.get((package, name), default)


    def declareClassSource(self, factory, forTypes=(), forInterfaces=()):
        """Like 'legacy.declareClassSource()', but only for this registry"""
        legacy.declareClassSource(factory, forTypes, forInterfaces,
            self.adapters
        )


    def class_source(self, value):
        return legacy.class_source(value, self.adapters)


    def ancestry(self, value):
        """Class names of 'value', most specific first, ending in "any" """
        return self.class_source(value).names


    def flush(self, component, version=None):
        """Register the deferred methods waiting for 'component'"""
        from generics.external import flush
        return flush(self, component, version)


    def __repr__(self):
        return '<Registry: %d classes, %d generics, %d pending>' % (
            len(self.classes), len(self.generics), len(self.pending)
        )


_default = None


def get_registry():
    """Return the default registry (creating it if necessary)"""
    global _default
    if _default is None:
        _default = Registry()
    return _default


def set_registry(registry):
    """Make 'registry' the default registry, and return the previous one"""
    global _default
    old, _default = _default, registry
    return old
