"""Typed properties, with optional getters and setters

 A property with a getter is "dynamic": it has no slot in the instance, and
 reading it calls 'getter(instance)'.  A property with a setter routes every
 assignment through 'setter(instance, value)', which must return the updated
 instance.  A getter without a setter makes a read-only property.

 Every assignment is all-or-nothing: the instance is re-validated afterwards
 and restored to its previous state if anything fails.
"""

import copy, logging
from generics.interfaces import *
from generics.classes import ANY, Union, LegacyClass, resolve_class

__all__ = [
    'PropertyObject', 'new_property', 'as_property', 'get_property',
    'set_property', 'props', 'prop_names', 'prop_exists', 'check_type',
    'NO_DEFAULT',
]

log = logging.getLogger(__name__)


class _NoDefault(object):
    def __repr__(self):
        return 'NO_DEFAULT'

NO_DEFAULT = _NoDefault()


class PropertyObject(object):

    """A declared property: name, type, and optional accessor functions"""

    __slots__ = 'name', 'type', 'getter', 'setter', 'default', 'validator'

    def __init__(self, type=ANY, getter=None, setter=None, default=NO_DEFAULT,
        validator=None, name=None
    ):
        self.type = resolve_class(type)
        self.getter = getter
        self.setter = setter
        self.default = default
        self.validator = validator
        self.name = name


    def named(self, name):
        """Return a copy of this property, called 'name'"""
        return PropertyObject(self.type, self.getter, self.setter,
            self.default, self.validator, name
        )


    def isDynamic(self):
        return self.getter is not None


    def defaultValue(self):
        """Return the value an omitted property starts out with"""
        if self.default is not NO_DEFAULT:
            return copy.copy(self.default)
        return _type_default(self.type)


    def errors(self, value):
        """Messages from this property's own validator for 'value'"""
        if self.validator is None:
            return []
        msg = self.validator(value)
        if not msg:
            return []
        if isinstance(msg, str):
            msg = [msg]
        return ['@%s %s' % (self.name, m) for m in msg]


    def __repr__(self):
        extras = []
        if self.getter is not None: extras.append('getter')
        if self.setter is not None: extras.append('setter')
        return '<property %s: <%s>%s>' % (
            self.name, self.type.name,
            extras and ' (%s)' % ', '.join(extras) or ''
        )


def _type_default(constraint):

    if constraint is ANY or isinstance(constraint, LegacyClass):
        return None

    if isinstance(constraint, Union):
        return _type_default(constraint.members[0])

    if constraint.pytype is not None:
        if isinstance(constraint.pytype, tuple):
            return None     # no sensible default function
        return constraint.pytype()

    if constraint.abstract:
        return None
    return constraint()


def new_property(type=ANY, getter=None, setter=None, default=NO_DEFAULT,
    validator=None, name=None
):
    """Declare a property (the name may be supplied by the class instead)"""

    if getter is not None and not callable(getter):
        raise DefinitionError("Property getter must be callable")
    if setter is not None and not callable(setter):
        raise DefinitionError("Property setter must be callable")
    if name is not None and not isinstance(name, str):
        raise DefinitionError("Property name must be a string")
    return PropertyObject(type, getter, setter, default, validator, name)


def as_property(ob, name):
    """Turn a property or type constraint into a property called 'name'"""
    if isinstance(ob, PropertyObject):
        return ob.named(name)
    return PropertyObject(ob, name=name)


def check_type(prop, value):
    """Raise 'TypeConstraintError' unless 'value' satisfies 'prop.type'"""
    if value not in prop.type:
        raise TypeConstraintError(prop.name, prop.type, value)


def _lookup(ob, name):
    try:
        return ob.klass.properties[name]
    except KeyError:
        raise PropertyNotFoundError(ob.klass.name, name) from None


def get_property(ob, name):
    """Return the value of property 'name' of 'ob'"""

    prop = _lookup(ob, name)
    if prop.getter is not None:
        return prop.getter(ob)
    return ob._values[name]


def set_property(ob, name, value):
    """Set property 'name' of 'ob' to 'value', and return the instance

    Assignments made by a setter to other properties of the same instance
    are type-checked immediately, but the instance is only validated once,
    when the outermost assignment finishes.
    """

    prop = _lookup(ob, name)
    if prop.setter is None and prop.getter is not None:
        raise ReadOnlyPropertyError(ob.klass.name, name)

    saved = dict(ob._values), ob.payload
    try:
        if prop.setter is not None:
            ob._setting += 1
            try:
                result = prop.setter(ob, value)
            finally:
                ob._setting -= 1
            if (not IObjectInstance.providedBy(result)
                or result.klass is not ob.klass
            ):
                raise DefinitionError(
                    "Setter of <%s>@%s must return the object, not %r"
                    % (ob.klass.name, name, result)
                )
        else:
            check_type(prop, value)
            ob._values[name] = value
            result = ob

        if not ob._setting:
            from generics.objects import validate
            validate(result)
            if result is not ob:
                validate(ob)

    except Exception:
        ob._values, ob.payload = saved
        raise

    return result


def props(ob):
    """Return a dictionary of all of 'ob''s property values"""
    return dict([(name, get_property(ob, name)) for name in prop_names(ob)])


def prop_names(ob):
    return list(ob.klass.properties)


def prop_exists(ob, name):
    return name in ob.klass.properties
