"""Tests for typed properties, getters and setters"""

from unittest import TestLoader, TestSuite
from generics import *
from generics.tests.checks import *


class RangeTests(RegistryCase):

    def setUp(self):
        RegistryCase.setUp(self)
        self.Range = define_range(self.registry)
        self.r = self.Range(start=1, end=10)

    def testGetter(self):
        self.assertEqual(self.r.length, 9)
        self.assertEqual(get_property(self.r, 'length'), 9)

    def testSetter(self):
        self.r.length = 5
        self.assertEqual(self.r.end, 6)
        self.assertEqual(self.r.length, 5)

    def testSetProperty(self):
        result = set_property(self.r, 'start', 3)
        self.assertTrue(result is self.r)
        self.assertEqual(get_property(self.r, 'start'), 3)
        self.assertEqual(self.r.length, 7)

    def testInvalidAssignmentRestores(self):
        self.r.length = 5
        try:
            self.r.end = 0
        except ValidationError as v:
            self.assertEqual(v.classname, 'range')
            self.assertEqual(v.errors,
                ["@end must be greater than or equal to @start"]
            )
        else:
            raise AssertionError("Should've got ValidationError")
        self.assertEqual(self.r.end, 6)

    def testInvalidSetterRestores(self):
        self.assertRaises(ValidationError, set_property, self.r, 'length', -5)
        self.assertEqual((self.r.start, self.r.end), (1, 10))

    def testTypeChecked(self):
        self.assertRaises(TypeConstraintError, set_property, self.r, 'start', 'x')
        self.assertRaises(TypeError, setattr, self.r, 'end', 2.5)
        self.assertEqual(self.r.start, 1)
        try:
            self.r.start = 'x'
        except TypeConstraintError as v:
            self.assertEqual(str(v), "@start must be int, not str")
        else:
            raise AssertionError("Should've got TypeConstraintError")

    def testMissingProperty(self):
        self.assertRaises(PropertyNotFoundError, get_property, self.r, 'width')
        self.assertRaises(PropertyNotFoundError, set_property, self.r, 'width', 1)
        self.assertEqual(getattr(self.r, 'width', None), None)
        try:
            self.r.width
        except AttributeError as v:
            self.assertEqual(str(v), "Can't find property <range>@width")
        else:
            raise AssertionError("Should've got PropertyNotFoundError")

    def testIntrospection(self):
        self.assertEqual(props(self.r), {'start': 1, 'end': 10, 'length': 9})
        self.assertEqual(prop_names(self.r), ['start', 'end', 'length'])
        self.assertTrue(prop_exists(self.r, 'length'))
        self.assertFalse(prop_exists(self.r, 'width'))


class PropertyTests(RegistryCase):

    def testReadOnly(self):
        circle = define_class('circle', properties={
            'radius': float,
            'diameter': new_property(float, getter=lambda c: c.radius * 2),
        })
        c = circle(radius=1.5)
        self.assertEqual(c.diameter, 3.0)
        self.assertRaises(ReadOnlyPropertyError, set_property, c, 'diameter', 4.0)
        self.assertRaises(ReadOnlyPropertyError, circle, diameter=4.0)

    def testDefaults(self):
        person = define_class('person', properties={
            'name': new_property(str, default='anonymous'),
            'age': int,
            'tags': list,
            'anything': ANY,
            'score': numeric,
        })
        p = person()
        self.assertEqual(p.name, 'anonymous')
        self.assertEqual(p.age, 0)
        self.assertEqual(p.tags, [])
        self.assertEqual(p.anything, None)
        self.assertEqual(p.score, 0)

    def testMutableDefaultsAreCopied(self):
        bag = define_class('bag', properties={
            'items': new_property(list, default=[]),
        })
        a, b = bag(), bag()
        a.items.append(1)
        self.assertEqual(b.items, [])

    def testNativeDefault(self):
        point = define_class('point', properties={'x': int, 'y': int})
        line = define_class('line', properties={'start': point, 'end': point})
        ln = line()
        self.assertEqual(ln.start, point())
        self.assertTrue(ln.start in point)

    def testInstanceDefault(self):
        point = define_class('point', properties={'x': int, 'y': int})
        origin = point(x=1, y=2)
        shape = define_class('shape', properties={
            'at': new_property(point, default=origin),
        })
        a, b = shape(), shape()
        self.assertEqual(a.at, origin)
        self.assertFalse(a.at is origin)
        a.at.x = 5
        self.assertEqual((b.at.x, origin.x), (1, 1))

    def testPropertyValidator(self):
        counter = define_class('counter', properties={
            'count': new_property(int, validator=lambda n: n < 0 and
                "must not be negative"
            ),
        })
        c = counter(count=2)
        try:
            c.count = -1
        except ValidationError as v:
            self.assertEqual(v.errors, ["@count must not be negative"])
        else:
            raise AssertionError("Should've got ValidationError")
        self.assertEqual(c.count, 2)
        self.assertRaises(ValidationError, counter, count=-1)

    def testSetterMustReturnObject(self):
        broken = define_class('broken', properties={
            'n': int,
            'twice': new_property(int,
                getter = lambda b: b.n * 2,
                setter = lambda b, v: None,
            ),
        })
        b = broken(n=2)
        self.assertRaises(DefinitionError, set_property, b, 'twice', 6)
        self.assertEqual(b.twice, 4)

    def testSetterMustKeepClass(self):
        other = define_class('other', properties={'n': int})
        def swap(b, v):
            set_property(b, 'n', v)
            return other(n=v)
        swapper = define_class('swapper', properties={
            'n': int,
            'alias': new_property(int, getter=lambda b: b.n, setter=swap),
        })
        s = swapper(n=1)
        self.assertRaises(DefinitionError, set_property, s, 'alias', 2)
        self.assertEqual(s.n, 1)
        self.assertTrue(s.klass is swapper)

    def testBadAccessors(self):
        self.assertRaises(DefinitionError, new_property, int, getter=5)
        self.assertRaises(DefinitionError, new_property, int, setter='x')
        self.assertRaises(DefinitionError, new_property, int, name=1)

    def testNamedProperties(self):
        prop = new_property(int, name='size')
        box = define_class('box', properties=[prop])
        self.assertTrue(box.properties['size'] is prop)
        self.assertEqual(repr(prop), '<property size: <int>>')


TestClasses = (
    RangeTests, PropertyTests,
)

def test_suite():
    return TestSuite(
        [TestLoader().loadTestsFromTestCase(t) for t in TestClasses]
    )
