"""Basic test setups"""

__all__ = ['RegistryCase', 'define_vehicles', 'define_range', 'PyBase', 'PyChild']

from unittest import TestCase
from generics import *


class RegistryCase(TestCase):

    """Runs each test against a fresh default registry"""

    def setUp(self):
        self.registry = Registry()
        self.saved = set_registry(self.registry)

    def tearDown(self):
        set_registry(self.saved)


def define_vehicles(registry):
    """Return '(vehicle, land, water, car, boat)' native classes"""
    vehicle = define_class('vehicle', registry=registry)
    land = define_class('land', vehicle, registry=registry)
    water = define_class('water', vehicle, registry=registry)
    car = define_class('car', land, registry=registry)
    boat = define_class('boat', water, registry=registry)
    return vehicle, land, water, car, boat


def define_range(registry):
    return define_class('range',
        properties = {
            'start': int,
            'end': int,
            'length': new_property(int,
                getter = lambda r: r.end - r.start,
                setter = lambda r, n: set_property(r, 'end', r.start + n),
            ),
        },
        validator = lambda r: r.end < r.start and
            "@end must be greater than or equal to @start",
        registry = registry,
    )


# Ordinary Python classes, dispatched on by MRO

class PyBase(object):
    pass

class PyChild(PyBase):
    pass
