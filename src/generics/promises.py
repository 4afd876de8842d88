"""Deferred arguments

 A 'Promise' captures an expression (source text plus the namespace to
 evaluate it in, or a zero-argument callable) without evaluating it.
 Generic functions pass promises through untouched; only a promise in a
 dispatch position is forced, and only so that its class can be read.
"""

from zope.interface import implementer
from generics.interfaces import IPromise

__all__ = ['Promise', 'promise', 'force']


_unforced = object()


@implementer(IPromise)
class Promise(object):

    __slots__ = 'expression', 'globals', 'locals', '_value'

    def __init__(self, expression, globals=None, locals=None):
        if not isinstance(expression, str) and not callable(expression):
            raise TypeError("Promise needs source text or a callable")
        self.expression = expression
        self.globals = globals
        self.locals = locals
        self._value = _unforced


    def force(self):
        if self._value is _unforced:
            if callable(self.expression):
                self._value = self.expression()
            else:
                self._value = eval(
                    self.expression,
                    self.globals if self.globals is not None else {},
                    self.locals
                )
            # drop the environment
            self.globals = self.locals = None
        return self._value


    def isForced(self):
        return self._value is not _unforced


    def __repr__(self):
        if callable(self.expression):
            text = getattr(self.expression, '__name__', 'callable')
        else:
            text = self.expression
        return '<Promise %s%s>' % (text, self.isForced() and ' (forced)' or '')


def promise(expression, globals=None, locals=None):
    """Defer evaluating 'expression'"""
    return Promise(expression, globals, locals)


def force(value):
    """Return the value of 'value', forcing it first if it's a promise"""
    if isinstance(value, Promise):
        return value.force()
    return value
