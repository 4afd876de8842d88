"""Class objects, unions, and the built-in base classes

    ClassObject -- a native class: name, parent, properties, validator and
        optional constructor.  Calling it constructs an instance.

    Union -- a named set of classes, usable as a type constraint and in
        method signatures (where it is expanded into one entry per member)

    LegacyClass -- a class of the host's own object system, known only by
        name (and, optionally, by the Python type that implements it)

    ANY -- the root of every class hierarchy

    define_class, new_union, legacy_class, ancestors, resolve_class -- the
        declaration API
"""

import logging, types
from zope.interface import implementer
from generics.interfaces import *

__all__ = [
    'ClassObject', 'Union', 'LegacyClass', 'ANY', 'NULL', 'MISSING', 'MISSING_ARG',
    'define_class', 'new_union', 'legacy_class', 'ancestors',
    'resolve_class', 'base_class', 'inherits', 'class_of',
    'BASE_CLASSES', 'numeric', 'MAX_DEPTH', 'RESERVED_NAMES',
]

log = logging.getLogger(__name__)

MAX_DEPTH = 1000

# Instance attributes that properties can't shadow
RESERVED_NAMES = frozenset(['klass', 'payload'])


class _Constraint(object):

    def __or__(self, other):
        return new_union(self, other)

    def __ror__(self, other):
        return new_union(other, self)

    def keys(self):
        return (self.name,)


@implementer(IClassObject)
class ClassObject(_Constraint):

    """A native class"""

    def __init__(self, name, parent=None, constructor=None, validator=None,
        properties=(), abstract=False, package=None, pytype=None
    ):
        self.name = name
        self.parent = parent
        self.constructor = constructor
        self.validator = validator
        self.abstract = abstract
        self.package = package
        self.pytype = pytype
        self.own_properties = own = {}
        for prop in properties:
            own[prop.name] = prop

        if parent is None:
            merged = {}
        else:
            merged = dict(parent.properties)
        merged.update(own)
        self.properties = merged


    def __call__(self, *args, **kw):
        from generics.objects import construct
        return construct(self, *args, **kw)


    def __contains__(self, value):
        if IObjectInstance.providedBy(value) and self in ancestors(value.klass):
            return True
        if self.pytype is not None:
            return isinstance(value, self.pytype)
        return False


    def ancestors(self):
        return ancestors(self)


    def base(self):
        """Return the base class this class wraps, or 'None'"""
        for klass in ancestors(self):
            if klass.pytype is not None:
                return klass


    def storedProperties(self):
        """Properties that keep a value in the instance (i.e. no getter)"""
        return [p for p in self.properties.values() if p.getter is None]


    def __repr__(self):
        return '<ClassObject %s>' % self.name


    def __str__(self):
        lines = ['<%s> class' % self.name]
        if self.parent is not None:
            lines.append('@ parent     : <%s>' % self.parent.name)
        if self.abstract:
            lines.append('@ abstract   : True')
        if self.properties:
            lines.append('@ properties :')
            width = max([len(n) for n in self.properties])
            for name, prop in self.properties.items():
                lines.append(
                    ' $ %s: <%s>' % (name.ljust(width), prop.type.name)
                )
        return '\n'.join(lines)


@implementer(ITypeConstraint)
class Union(_Constraint):

    """A set of classes treated as one type"""

    def __init__(self, members, name=None):
        self.members = tuple(members)
        if name is None:
            name = ' | '.join([m.name for m in self.members])
        self.name = name

    def __contains__(self, value):
        for member in self.members:
            if value in member:
                return True
        return False

    def keys(self):
        return tuple([m.name for m in self.members])

    def __eq__(self, other):
        return isinstance(other, Union) and self.members == other.members

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.members)

    def __repr__(self):
        return '<Union %s>' % self.name


@implementer(ITypeConstraint)
class LegacyClass(_Constraint):

    """A class of the host's own object system, referenced by name"""

    def __init__(self, name, pytype=None):
        self.name = name
        self.pytype = pytype

    def __contains__(self, value):
        if self.pytype is not None:
            return isinstance(value, self.pytype)
        from generics.legacy import class_source
        return self.name in class_source(value).names

    def __eq__(self, other):
        return isinstance(other, LegacyClass) and self.name == other.name

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((LegacyClass, self.name))

    def __repr__(self):
        return '<LegacyClass %s>' % self.name


class _AnyClass(ClassObject):

    def __contains__(self, value):
        return True


ANY = _AnyClass('any')


class _Missing(object):

    """Marker for a dispatch argument that wasn't supplied"""

    __slots__ = ()

    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False

    def __reduce__(self):
        return 'MISSING_ARG'


MISSING_ARG = _Missing()

NULL = LegacyClass('NULL', type(None))
MISSING = LegacyClass('missing', _Missing)



# Base classes wrap Python's primitive types; order matters, since 'bool'
# has to be defined after its parent 'int'

def _base(name, pytype, parent=ANY):
    return ClassObject(name, parent, pytype=pytype)

_int = _base('int', int)

BASE_CLASSES = dict([(c.name, c) for c in [
    _base('bool', bool, _int), _int,
    _base('float', float),
    _base('complex', complex),
    _base('str', str),
    _base('bytes', bytes),
    _base('list', list),
    _base('tuple', tuple),
    _base('dict', dict),
    _base('function',
        (types.FunctionType, types.BuiltinFunctionType, types.MethodType)
    ),
]])

_by_type = {}
for _klass in BASE_CLASSES.values():
    for _t in isinstance(_klass.pytype, tuple) and _klass.pytype or [_klass.pytype]:
        _by_type[_t] = _klass
del _klass, _t

numeric = Union([BASE_CLASSES['int'], BASE_CLASSES['float']], 'numeric')


def base_class(pytype):
    """Return the base class wrapping Python type 'pytype', or 'None'"""
    return _by_type.get(pytype)


def ancestors(klass):
    """Return '(klass, parent, ..., ANY)'"""

    chain = []
    while klass is not None:
        chain.append(klass)
        if len(chain) > MAX_DEPTH:
            raise InternalError(
                "Class hierarchy of <%s> is too deep (cycle?)" % chain[0].name
            )
        klass = klass.parent
    return tuple(chain)


def resolve_class(ob):
    """Return the type constraint that 'ob' stands for

    Accepts class objects, unions and legacy classes as-is; Python types map
    to the matching base class, or to a 'LegacyClass' of the same name;
    'None' means 'NULL'.
    """

    if ITypeConstraint.providedBy(ob):
        return ob
    if ob is None:
        return NULL
    if ob is object:
        return ANY
    if isinstance(ob, type):
        return base_class(ob) or LegacyClass(ob.__name__, ob)
    raise DefinitionError("%r is not a class" % (ob,))


def legacy_class(name, pytype=None):
    """Refer to a class of the host object system by name"""
    if not name or not isinstance(name, str):
        raise DefinitionError("Legacy class name must be a non-empty string")
    return LegacyClass(name, pytype)


def new_union(*classes):
    """Return a union of 'classes' (nested unions are flattened)"""

    members = []
    for ob in classes:
        ob = resolve_class(ob)
        if isinstance(ob, Union):
            items = ob.members
        else:
            items = ob,
        for item in items:
            if item not in members:
                members.append(item)

    if not members:
        raise DefinitionError("A union needs at least one class")
    return Union(members)


def inherits(value, klass):
    """Is 'value' an instance of 'klass' (or of one of its subclasses)?"""
    return value in resolve_class(klass)


def class_of(value):
    """Return the class object of 'value', or 'None' for non-native values"""
    if IObjectInstance.providedBy(value):
        return value.klass
    return base_class(type(value))


def define_class(name, parent=ANY, constructor=None, validator=None,
    properties=(), abstract=False, package=None, registry=None
):
    """Define (and register) a new class

    'parent' may be a class object or a Python primitive type; 'properties'
    is a sequence of named properties, or a mapping from names to properties
    or type constraints.
    """
    from generics.properties import PropertyObject, as_property

    if not name or not isinstance(name, str):
        raise DefinitionError("Class name must be a non-empty string")

    if isinstance(parent, type):
        parent = base_class(parent)
    if not IClassObject.providedBy(parent):
        raise DefinitionError(
            "Can't use %r as the parent of <%s>" % (parent, name)
        )
    if abstract and parent is not ANY and not parent.abstract:
        raise DefinitionError(
            "Abstract class <%s> must have an abstract parent" % name
        )

    if hasattr(properties, 'items'):
        properties = [as_property(v, k) for k, v in properties.items()]

    props = []
    seen = {}
    for prop in properties:
        if not isinstance(prop, PropertyObject) or not prop.name:
            raise DefinitionError(
                "<%s> properties must be named properties" % name
            )
        if prop.name in seen:
            raise DefinitionError(
                "<%s> declares property @%s twice" % (name, prop.name)
            )
        if prop.name in RESERVED_NAMES or prop.name.startswith('_'):
            raise DefinitionError(
                "<%s> can't declare property @%s" % (name, prop.name)
            )
        seen[prop.name] = prop
        props.append(prop)

    klass = ClassObject(name, parent, constructor, validator, props,
        abstract, package
    )
    ancestors(klass)

    if registry is None:
        from generics.registry import get_registry
        registry = get_registry()
    registry.addClass(klass)
    log.debug("Defined class <%s> (parent <%s>)", name, parent.name)
    return klass
