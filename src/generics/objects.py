"""Instances of native classes: construction and validation"""

import copy, logging
from zope.interface import implementer
from generics.interfaces import *
from generics.classes import ANY, NULL, ancestors
from generics.properties import get_property, set_property, check_type

__all__ = ['Object', 'new_object', 'construct', 'validate', 'NOTHING']

log = logging.getLogger(__name__)


class _Nothing(object):
    def __repr__(self):
        return 'NOTHING'

NOTHING = _Nothing()


@implementer(IObjectInstance)
class Object(object):

    """An instance of a native class

    Properties are available as attributes; assigning to one is the same
    as calling 'set_property()'.
    """

    __slots__ = 'klass', 'payload', '_values', '_setting'

    def __init__(self, klass, payload=None, values=()):
        init = object.__setattr__
        init(self, 'klass', klass)
        init(self, 'payload', payload)
        init(self, '_values', dict(values))
        init(self, '_setting', 0)


    def __getattr__(self, name):
        if name.startswith('__') or name in Object.__slots__:
            raise AttributeError(name)
        return get_property(self, name)


    def __setattr__(self, name, value):
        if name in Object.__slots__:
            if name == 'klass':
                raise AttributeError("An object's class can't be changed")
            object.__setattr__(self, name, value)
            return
        result = set_property(self, name, value)
        if result is not self:
            object.__setattr__(self, 'payload', result.payload)
            object.__setattr__(self, '_values', dict(result._values))


    def __copy__(self):
        return Object(self.klass, self.payload, self._values)


    def __deepcopy__(self, memo):
        ob = memo[id(self)] = Object(self.klass)
        object.__setattr__(ob, 'payload', copy.deepcopy(self.payload, memo))
        object.__setattr__(ob, '_values', copy.deepcopy(self._values, memo))
        return ob


    def __reduce__(self):
        return Object, (self.klass, self.payload, self._values)


    def __eq__(self, other):
        if not isinstance(other, Object):
            return NotImplemented
        return (
            self.klass is other.klass and self.payload == other.payload
            and self._values == other._values
        )


    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


    __hash__ = None


    def __repr__(self):
        parts = ['<%s' % self.klass.name]
        if self.klass.base() is not None:
            parts.append(repr(self.payload))
        for name in self.klass.properties:
            parts.append('%s=%r' % (name, get_property(self, name)))
        return ' '.join(parts) + '>'


    def __str__(self):
        lines = ['<%s>' % self.klass.name]
        if self.klass.base() is not None:
            lines[0] += ' %r' % (self.payload,)
        names = list(self.klass.properties)
        if names:
            width = max([len(n) for n in names])
            for name in names:
                lines.append(
                    ' @ %s: %r' % (name.ljust(width), get_property(self, name))
                )
        return '\n'.join(lines)



def construct(klass, *args, **kw):
    """Construct an instance of concrete class 'klass'"""
    if klass.abstract:
        raise DefinitionError(
            "Can't construct an object from abstract class <%s>" % klass.name
        )
    return _build(klass, *args, **kw)


def _build(klass, *args, **kw):
    """Call 'klass''s constructor (or the default one) and check the result"""

    if klass.constructor is None:
        return _default_constructor(klass, *args, **kw)

    ob = klass.constructor(klass, *args, **kw)
    if not isinstance(ob, Object) or ob.klass is not klass:
        raise DefinitionError(
            "Constructor of <%s> must return the result of new_object(), not %r"
            % (klass.name, ob)
        )
    return ob


def _default_constructor(klass, _data=NOTHING, **kw):

    own = klass.own_properties
    mine = dict([(k, v) for k, v in kw.items() if k in own])
    theirs = dict([(k, v) for k, v in kw.items() if k not in own])

    parent = klass.parent
    if parent is ANY:
        if _data is not NOTHING:
            raise TypeConstraintError('data', NULL, _data)
        mine.update(theirs)     # unknown names, reported by new_object()
        return new_object(klass, None, **mine)

    if parent.pytype is not None:
        mine.update(theirs)
        return new_object(klass, _data, **mine)

    if _data is NOTHING:
        proto = _build(parent, **theirs)
    else:
        proto = _build(parent, _data, **theirs)
    return new_object(klass, proto, **mine)


def new_object(klass, _parent=None, **values):
    """Build and validate an instance of 'klass'

    This is what every constructor has to end with.  '_parent' is the
    prototype: an instance of 'klass.parent' holding the inherited property
    values, or for a class that wraps a base type, the wrapped value.  If
    it's omitted, the parent's constructor is called with the
    'values' the parent declares.
    'values' are 'klass''s own property values; omitted ones get their
    defaults.
    """

    parent = klass.parent
    inherited = {}
    payload = None
    base = klass.base()

    if _parent is None or _parent is NOTHING:
        theirs = dict([
            (k, v) for k, v in values.items()
            if k in parent.properties and k not in klass.own_properties
        ])
        if base is not None:
            if parent.pytype is None:
                proto = _build(parent, **theirs)
                payload, inherited = proto.payload, proto._values
            elif not isinstance(base.pytype, tuple):
                payload = base.pytype()
        elif parent is not ANY:
            proto = _build(parent, **theirs)
            inherited = proto._values

    elif isinstance(_parent, Object):
        if _parent not in parent:
            raise TypeConstraintError('parent', parent, _parent)
        payload, inherited = _parent.payload, _parent._values

    else:
        if base is None or _parent not in base:
            raise TypeConstraintError('data', base or parent, _parent)
        payload = _parent

    props = klass.properties
    for name, value in values.items():
        if name not in props:
            raise PropertyNotFoundError(klass.name, name)
        if props[name].getter is not None:
            raise ReadOnlyPropertyError(klass.name, name)

    stored = {}
    for prop in klass.storedProperties():
        name = prop.name
        if name in values:
            value = values[name]
        elif name in inherited:
            value = inherited[name]
        else:
            value = prop.defaultValue()
        check_type(prop, value)
        stored[name] = value

    ob = Object(klass, payload, stored)
    validate(ob)
    log.debug("Constructed %r", klass)
    return ob


def _messages(result):
    if not result:
        return []
    if isinstance(result, str):
        return [result]
    return list(result)


def validate(ob):
    """Check 'ob' against its property types and every validator

    Property types and property validators are checked first, then the
    class validators from the root down to 'ob''s own class.  All the
    failures are collected into a single 'ValidationError'.
    """

    klass = ob.klass
    errors = []

    for prop in klass.storedProperties():
        value = ob._values[prop.name]
        if value not in prop.type:
            errors.append(str(TypeConstraintError(prop.name, prop.type, value)))
        else:
            errors.extend(prop.errors(value))

    for prop in klass.properties.values():
        if prop.getter is not None and prop.validator is not None:
            errors.extend(prop.errors(prop.getter(ob)))

    base = klass.base()
    if base is not None and base.pytype is not None:
        if not isinstance(ob.payload, base.pytype):
            errors.append(
                "Underlying data must be <%s>, not <%s>"
                % (base.name, type(ob.payload).__name__)
            )

    if not errors:
        for cls in reversed(ancestors(klass)):
            if cls.validator is not None:
                errors.extend(_messages(cls.validator(ob)))

    if errors:
        raise ValidationError(klass.name, errors)
    return ob
