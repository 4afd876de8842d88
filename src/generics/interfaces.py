from zope.interface import Interface, Attribute

__all__ = [
    'ObjectModelError', 'DefinitionError', 'TypeConstraintError',
    'ValidationError', 'PropertyNotFoundError', 'ReadOnlyPropertyError',
    'NoApplicableMethodError', 'InternalError',
    'ITypeConstraint', 'IClassObject', 'IObjectInstance', 'IClassSource',
    'IGenericFunction', 'ILegacySingleDispatch', 'ILegacyDoubleDispatch',
    'IPromise',
]


class ObjectModelError(Exception):
    """Base class for errors raised by the object model"""


class DefinitionError(ObjectModelError):
    """A class, property or generic function declaration is malformed"""


class TypeConstraintError(ObjectModelError, TypeError):
    """A value does not satisfy a property's declared type"""

    def __init__(self, name, constraint, value):
        self.name = name
        self.constraint = constraint
        self.value = value
        ObjectModelError.__init__(self,
            "@%s must be %s, not %s" % (
                name, getattr(constraint, 'name', constraint),
                type(value).__name__
            )
        )


class ValidationError(ObjectModelError):
    """One or more validators rejected an object

    'errors' holds every failing message, ancestors' validators first."""

    def __init__(self, classname, errors):
        self.classname = classname
        self.errors = list(errors)
        ObjectModelError.__init__(self,
            "<%s> object is invalid:\n%s" % (
                classname, '\n'.join(['- %s' % e for e in self.errors])
            )
        )


class PropertyNotFoundError(ObjectModelError, AttributeError):
    """The named property isn't declared by the object's class"""

    def __init__(self, classname, name):
        self.classname = classname
        self.name = name
        ObjectModelError.__init__(self,
            "Can't find property <%s>@%s" % (classname, name)
        )


class ReadOnlyPropertyError(ObjectModelError, AttributeError):
    """Attempt to set a property that has a getter but no setter"""

    def __init__(self, classname, name):
        self.classname = classname
        self.name = name
        ObjectModelError.__init__(self,
            "Can't set read-only property <%s>@%s" % (classname, name)
        )


class NoApplicableMethodError(ObjectModelError, TypeError):
    """No method (native or legacy) applies to the given arguments"""

    def __init__(self, generic, classes, next_method=False):
        self.generic = generic
        self.classes = tuple(classes)
        what = next_method and "next method" or "method"
        ObjectModelError.__init__(self,
            "Can't find %s for generic %s(%s)" % (
                what, generic, ', '.join(self.classes)
            )
        )


class InternalError(ObjectModelError):
    """An invariant of the object model has been broken"""



class ITypeConstraint(Interface):

    """Something a value can be checked against: a class, union, etc."""

    name = Attribute("""Human-readable name, also used as a dispatch key""")

    def __contains__(value):
        """Return true if 'value' satisfies this constraint"""

    def keys():
        """Return the dispatch keys (class names) this constraint stands for

        A union returns one key per member, which is how method registration
        expands it."""


class IClassObject(ITypeConstraint):

    """The reified definition of a class"""

    parent = Attribute("""Parent 'IClassObject', or 'None' for the root""")

    properties = Attribute(
        """Ordered mapping of property name -> property, ancestors included"""
    )

    validator = Attribute(
        """Callable 'instance -> messages', or 'None'"""
    )

    abstract = Attribute("""True if the class cannot be instantiated""")

    def __call__(*args, **kw):
        """Construct an instance"""


class IObjectInstance(Interface):

    """An instance of a native class"""

    klass = Attribute("""The 'IClassObject' that owns this instance""")

    payload = Attribute(
        """Wrapped primitive value for base-rooted classes, else 'None'"""
    )


class IClassSource(Interface):

    """Dispatch view of a runtime value's class

    Native instances expose their full class hierarchy; objects of the
    host's own object system expose whatever ranking of classes they have.
    """

    names = Attribute(
        """Class names, most specific first, ending with the root ("any")"""
    )


class IGenericFunction(Interface):

    """A function whose body is chosen by the classes of its arguments"""

    name = Attribute("""The generic's name""")

    signature = Attribute("""Names of the arguments used for dispatch""")

    def __call__(*args, **kw):
        """Dispatch and invoke the selected method"""

    def addMethod(classes, method):
        """Call 'method' when the dispatch arguments match 'classes'"""



class ILegacySingleDispatch(Interface):

    """The two services needed from a single-dispatch object system"""

    def ranked_classes(value):
        """Return class names of 'value', most specific first

        The sequence ends with the system's universal root class."""

    def lookup_legacy_method(name, ranked_classes):
        """Return the method for generic 'name', or 'None' if not found"""


class ILegacyDoubleDispatch(Interface):

    """Name-keyed method lookup in a double-dispatch object system"""

    def lookup_legacy_method2(name, classname):
        """Return the method for generic 'name' on 'classname', or 'None'"""


class IPromise(Interface):

    """An argument whose evaluation has been deferred"""

    expression = Attribute("""What will be evaluated (source text, or callable)""")

    def force():
        """Evaluate (once) and return the value"""
