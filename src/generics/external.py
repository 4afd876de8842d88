"""Methods for generic functions defined by other components

 A component can add a method to a generic function owned by another
 component that may not be loaded yet::

    shape_area = declare_external_method('geometry', 'area', ['shape'],
        version='1.2')
    register_method(shape_area, Hexagon, hexagon_area)

 Nothing is registered until the owning component is loaded and calls
 'flush()' (or 'Registry.flush()'); at that point, if the component's
 installed version is older than the declared minimum, the method is
 silently skipped.
"""

import logging
from collections import namedtuple
from generics.interfaces import *

__all__ = [
    'ExternalGeneric', 'PendingMethod', 'declare_external_method', 'flush',
    'parse_version',
]

log = logging.getLogger(__name__)


PendingMethod = namedtuple('PendingMethod', 'generic classes method')


def parse_version(text):
    """Turn '"1.2.3"' into '(1, 2, 3)'

    Trailing non-numeric parts of a segment (as in '"2.0rc1"') are ignored.
    """

    if isinstance(text, tuple):
        return text
    segments = []
    for part in str(text).split('.'):
        digits = ''
        for ch in part:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        segments.append(int(digits))
    if not segments:
        raise DefinitionError("Invalid version: %r" % (text,))
    while len(segments) > 1 and segments[-1] == 0:
        segments.pop()
    return tuple(segments)


class ExternalGeneric(object):

    """A generic function owned by another (possibly unloaded) component"""

    __slots__ = 'package', 'name', 'signature', 'version'

    def __init__(self, package, name, signature, version=None):
        if not package or not name:
            raise DefinitionError(
                "External generics need a component and a name"
            )
        if isinstance(signature, str):
            signature = signature,
        if not signature:
            raise DefinitionError(
                "Generic %s must dispatch on at least one argument" % name
            )
        self.package = package
        self.name = name
        self.signature = tuple(signature)
        self.version = version is not None and parse_version(version) or None


    def defer(self, classes, method, registry=None):
        """Queue 'method' until 'self.package' is flushed"""

        if not isinstance(classes, (list, tuple)):
            classes = classes,
        if len(classes) != len(self.signature):
            raise DefinitionError(
                "%s::%s() dispatches on %d argument(s), but %d class(es) given"
                % (self.package, self.name, len(self.signature), len(classes))
            )
        if registry is None:
            from generics.registry import get_registry
            registry = get_registry()

        registry.pending.append(PendingMethod(self, tuple(classes), method))
        log.debug("Deferred method for %s::%s%r",
            self.package, self.name, tuple(classes)
        )
        return method


    def isCompatible(self, installed):
        """Does 'installed' meet this declaration's minimum version?"""
        if self.version is None:
            return True
        if installed is None:
            return False
        return parse_version(installed) >= self.version


    def __repr__(self):
        return '<ExternalGeneric %s::%s(%s)>' % (
            self.package, self.name, ', '.join(self.signature)
        )


def declare_external_method(owner_component, generic_name, signature,
    version=None
):
    """Refer to generic 'generic_name' of 'owner_component'

    'version' is the minimum version of 'owner_component' that the methods
    registered through the declaration are written for.
    """
    return ExternalGeneric(owner_component, generic_name, signature, version)


def installed_version(component):
    """Version of the installed distribution 'component', or 'None'"""
    from importlib import metadata
    try:
        return metadata.version(component)
    except metadata.PackageNotFoundError:
        return None


def flush(registry, component, version=None):
    """Register the methods deferred for generics owned by 'component'

    'version' is the loaded version of 'component'; if not given, it's read
    from the installed distribution's metadata, when any pending
    declaration needs it.  Returns the number of methods registered.
    Methods whose generic isn't defined (yet) stay queued.  Every
    pending method is checked before any is registered.
    """

    ready = []
    waiting = []

    for pending in registry.pending:

        external = pending.generic
        if external.package != component:
            waiting.append(pending)
            continue

        if external.version is not None and version is None:
            version = installed_version(component)

        if not external.isCompatible(version):
            log.debug("Skipping method for %s::%s: needs version %s, have %s",
                component, external.name,
                '.'.join(map(str, external.version)), version
            )
            continue

        generic = registry.getGeneric(external.name, component)
        if generic is None:
            log.debug("%s::%s isn't defined; method stays deferred",
                component, external.name
            )
            waiting.append(pending)
            continue

        if generic.signature != external.signature:
            raise DefinitionError(
                "%r doesn't match %s::%s(%s)" % (
                    external, component, generic.name,
                    ', '.join(generic.signature)
                )
            )

        ready.append((generic, pending))

    count = 0
    try:
        for generic, pending in ready:
            generic.addMethod(pending.classes, pending.method)
            count += 1
    finally:
        registry.pending[:] = waiting + [p for g, p in ready[count:]]
    log.debug("Flushed %s: %d method(s) registered", component, count)
    return count
