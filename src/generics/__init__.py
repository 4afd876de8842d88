"""Classes with Typed Properties, and Multiple-Dispatch Generic Functions

 Classes are defined with 'define_class()': each has a single parent, a set
 of typed properties (optionally computed by getter/setter functions) and a
 validator.  Generic functions, made with 'new_generic()' or '@generic()',
 choose a method by the classes of one or more of their arguments; the
 first argument is the most significant.  Arguments from Python's own
 class system take part in dispatch through their MRO, and when no native
 method applies, the legacy method tables of the registry are consulted.

 Quick example::

    Range = define_class('range',
        properties = {
            'start': int, 'end': int,
            'length': new_property(int,
                getter = lambda r: r.end - r.start,
                setter = lambda r, n: set_property(r, 'end', r.start + n),
            ),
        },
        validator = lambda r: r.end < r.start and "@end must be >= @start",
    )

    @generic('x')
    def describe(x): "Describe 'x'"

    @describe.when(Range)
    def describe_range(x):
        return "%d..%d" % (x.start, x.end)
"""

from generics.interfaces import *
from generics.classes import *
from generics.properties import *
from generics.objects import Object, new_object, validate
from generics.functions import *
from generics.combiners import NextMethod
from generics.external import declare_external_method, ExternalGeneric, flush
from generics.promises import Promise, promise, force
from generics.registry import Registry, get_registry, set_registry
