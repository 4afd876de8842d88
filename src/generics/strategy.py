"""Dispatch strategy: finding the most specific method

    candidate_paths -- iterate over the method-table paths that apply to a
        call, in most-specific-first order

    DispatchFrame -- state of one generic function call, used to pick the
        first method and, via 'next_method', the ones after it

    ancestry_of, table_paths -- helpers for lookups and introspection

 Dispatch is done one argument at a time, in signature order.  For the first
 dispatch argument, each of its classes (most specific first) that has an
 entry in the method table is tried in turn; under that entry, the same
 search is repeated for the second argument, and so on.  So the first
 argument always dominates: a method for a more specific first-argument
 class beats any method for a less specific one, whatever the classes of
 the remaining arguments.
"""

import logging
from generics.interfaces import *
from generics.promises import Promise

__all__ = [
    'candidate_paths', 'DispatchFrame', 'ancestry_of', 'table_paths',
]

log = logging.getLogger(__name__)


def candidate_paths(table, ancestry):
    """Yield '(path, method)' for every entry of 'table' applying to a call

    'ancestry' has one sequence of class names per dispatch argument.
    Entries are yielded in dispatch order: the first is the method that
    should be called, the second is its "next method", and so on.
    """

    last = len(ancestry) - 1

    def walk(node, depth, prefix):
        names = ancestry[depth]
        if depth == last:
            for name in names:
                if name in node:
                    yield prefix + (name,), node[name]
        else:
            for name in names:
                if name in node:
                    for item in walk(node[name], depth+1, prefix + (name,)):
                        yield item

    return walk(table, 0, ())


def ancestry_of(registry, value):
    """Class names of 'value' for dispatching, forcing it if it's a promise"""
    if isinstance(value, Promise):
        value = value.force()
    return registry.ancestry(value)


def table_paths(table, depth):
    """Yield '(path, method)' for every entry in a 'depth'-level table"""
    if depth == 1:
        for name, method in table.items():
            yield (name,), method
    else:
        for name, subtable in table.items():
            for path, method in table_paths(subtable, depth-1):
                yield (name,) + path, method



class DispatchFrame(object):

    """One generic function call

    'ancestry' holds the class names of each dispatch argument.  Applicable
    methods are found lazily, as the call (and its 'next_method' chain)
    needs them; 'found' holds the '(path, method)' pairs found so far, in
    order.
    """

    __slots__ = 'generic', 'args', 'kw', 'values', 'ancestry', 'found', \
        '_search'

    def __init__(self, generic, args, kw, values):
        self.generic = generic
        self.args = args
        self.kw = kw
        self.values = values
        registry = generic.registry
        self.ancestry = tuple([ancestry_of(registry, v) for v in values])
        self.found = []
        self._search = candidate_paths(generic.methods, self.ancestry)


    def classes(self):
        """Most specific class name of each dispatch argument"""
        return tuple([names[0] for names in self.ancestry])


    def entry(self, index):
        """Return the 'index'th applicable '(path, method)', or 'None'"""
        found = self.found
        while len(found) <= index:
            if self._search is None:
                return None
            for item in self._search:
                found.append(item)
                break
            else:
                self._search = None
                return None
        return found[index]


    def nextAfter(self, index):
        """Return '(position, path, method)' of the method after 'index'

        Methods already in the chain up to 'index' are skipped (the same
        method may be registered under several paths); 'index' of -1 gives
        the first applicable method.  Returns 'None' if there are no more.
        """

        seen = [method for path, method in self.found[:index+1]]
        position = index + 1
        while True:
            item = self.entry(position)
            if item is None:
                return None
            path, method = item
            if method not in seen:
                return position, path, method
            position += 1


    def depths(self, index):
        """How far up each argument's ancestry the 'index'th method is"""
        path = self.found[index][0]
        return tuple([
            names.index(name) for names, name in zip(self.ancestry, path)
        ])


    def __repr__(self):
        return '<DispatchFrame %s(%s)>' % (
            self.generic.name, ', '.join(self.classes())
        )
