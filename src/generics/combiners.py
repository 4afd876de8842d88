"""Method chaining

 A method whose first parameter is named 'next_method' is passed a callable
 that invokes the next applicable method of the same call: the one that
 dispatch would have chosen if the current method hadn't been registered.
 E.g.::

    @describe.when(Rectangle)
    def describe_rectangle(next_method, shape):
        return next_method() + " with four right angles"

 Called with no arguments, 'next_method' reuses the arguments of the
 original call; otherwise the arguments given are passed on.
"""

import inspect, logging
from generics.interfaces import NoApplicableMethodError

__all__ = ['NextMethod', 'takes_next_method', 'invoke']

log = logging.getLogger(__name__)


def takes_next_method(method):
    """Is 'method''s first parameter called 'next_method'?"""
    try:
        params = inspect.signature(method).parameters
    except (TypeError, ValueError):
        return False
    for name in params:
        return name == 'next_method'
    return False


class NextMethod(object):

    """Callable that continues a dispatch from position 'index'"""

    __slots__ = 'frame', 'index'

    def __init__(self, frame, index):
        self.frame = frame
        self.index = index

    def __call__(self, *args, **kw):
        frame = self.frame
        if not args and not kw:
            args, kw = frame.args, frame.kw
        found = frame.nextAfter(self.index)
        if found is None:
            raise NoApplicableMethodError(
                frame.generic.name, frame.classes(), next_method=True
            )
        index, path, method = found
        log.debug("%s: next method is %r", frame.generic.name, path)
        return invoke(frame, index, method, args, kw)

    def exists(self):
        """Is there a next method to call?"""
        return self.frame.nextAfter(self.index) is not None

    def __repr__(self):
        return '<next_method of %r>' % (self.frame,)


def invoke(frame, index, method, args, kw):
    """Call 'method' (the 'index'th of 'frame') with 'args' and 'kw'"""
    if id(method) in frame.generic.chained:
        return method(NextMethod(frame, index), *args, **kw)
    return method(*args, **kw)
