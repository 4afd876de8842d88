"""Tests for class sources and legacy method fallback"""

from unittest import TestLoader, TestSuite
from zope.interface import implementer
from generics import *
from generics.legacy import class_source, LegacyNamed, SingleDispatchTable, \
    DoubleDispatchTable
from generics.tests.checks import *


class Tagged(object):
    pass


class ClassSourceTests(RegistryCase):

    def testBaseValues(self):
        self.assertEqual(class_source(5).names, ('int', 'any'))
        self.assertEqual(class_source(True).names, ('bool', 'int', 'any'))
        self.assertEqual(class_source('x').names, ('str', 'any'))
        self.assertEqual(class_source(len).names, ('function', 'any'))
        self.assertEqual(class_source(None).names, ('NULL', 'any'))
        self.assertEqual(class_source(MISSING_ARG).names, ('missing', 'any'))

    def testPythonObjects(self):
        self.assertEqual(class_source(PyChild()).names,
            ('PyChild', 'PyBase', 'any')
        )
        self.assertEqual(class_source(object()).names, ('any',))

    def testNativeObjects(self):
        rng = define_range(self.registry)
        self.assertEqual(class_source(rng()).names, ('range', 'any'))

    def testRegistryClassSource(self):
        self.registry.declareClassSource(
            lambda ob: LegacyNamed('tagged'), forTypes=[Tagged]
        )
        self.assertEqual(self.registry.ancestry(Tagged()), ('tagged', 'any'))
        self.assertEqual(Registry().ancestry(Tagged()), ('Tagged', 'any'))
        self.assertEqual(self.registry.ancestry(5), ('int', 'any'))

        g = new_generic('g', 'x')
        g.addMethod(legacy_class('tagged'), lambda x: "tagged")
        self.assertEqual(g(Tagged()), "tagged")

    def testRankedClasses(self):
        table = SingleDispatchTable()
        self.assertEqual(table.ranked_classes(PyChild()),
            ('PyChild', 'PyBase', 'object')
        )
        self.assertEqual(table.ranked_classes(5), ('int', 'object'))


class FallbackTests(RegistryCase):

    def setUp(self):
        RegistryCase.setUp(self)
        self.text = define_class('text', str)
        self.number = define_class('number', float)
        self.bar = new_generic('bar', ['x', 'y'])
        self.bar.addMethod([self.text, self.number], lambda x, y: "native")

    def testNativeFirst(self):
        self.registry.legacy.register('bar', 'text', lambda x, y: "legacy")
        self.assertEqual(self.bar(self.text('a'), self.number(1.0)), "native")

    def testSingleDispatchFallback(self):
        self.registry.legacy.register('bar', 'str', lambda x, y: ("str", x, y))
        self.assertEqual(self.bar('a', 1.0), ("str", 'a', 1.0))

    def testDefaultFallback(self):
        self.registry.legacy.register('bar', 'default', lambda x, y: "default")
        self.assertEqual(self.bar(1, 2), "default")

    def testRankedFallback(self):
        self.registry.legacy.register('bar', 'PyBase', lambda x, y: "base")
        self.assertEqual(self.bar(PyChild(), 1), "base")

    def testDoubleDispatchFallback(self):
        self.registry.legacy2.register('bar', 'str', lambda x, y: "double")
        self.registry.legacy2.register('bar', 'ANY', lambda x, y: "double any")
        self.assertEqual(self.bar('a', 1.0), "double")
        self.assertEqual(self.bar(1, 1.0), "double any")
        self.registry.legacy.register('bar', 'int', lambda x, y: "single")
        self.assertEqual(self.bar(1, 1.0), "single")

    def testRegisterOnLegacyGeneric(self):
        def baz(x):
            pass
        register_method('bar', str, lambda x, y: "by name")
        register_method(baz, ANY, lambda x: "by function")
        self.assertEqual(self.bar('a', 1.0), "by name")
        self.assertTrue(
            self.registry.legacy.lookup_legacy_method('baz', ('object',))
            is not None
        )
        self.assertEqual(
            self.registry.legacy.lookup_legacy_method('baz', ())(1),
            "by function"
        )
        self.assertRaises(DefinitionError,
            register_method, 'bar', [str, str], lambda x, y: None
        )
        self.assertRaises(DefinitionError, register_method, 5, str, len)
        self.assertRaises(DefinitionError, register_method, self.text, str, len)

    def testRegisterOnGeneric(self):
        self.assertEqual(
            register_method(self.bar, [str, float], lambda x, y: "plain"),
            self.bar.methods['str']['float']
        )
        self.assertEqual(self.bar('a', 1.0), "plain")


class CollaboratorTests(RegistryCase):

    def testCustomCollaborators(self):

        @implementer(ILegacySingleDispatch)
        class Recorder(object):
            def __init__(self):
                self.asked = []
            def ranked_classes(self, value):
                return (type(value).__name__.upper(), 'object')
            def lookup_legacy_method(self, name, ranked):
                self.asked.append((name, ranked))
                return None

        single = Recorder()
        double = DoubleDispatchTable()
        double.register('frob', 'INT', lambda x: x * 2)

        registry = Registry(single, double)
        frob = new_generic('frob', 'x', registry=registry)
        self.assertEqual(frob(21), 42)
        self.assertEqual(single.asked, [('frob', ('INT', 'object'))])
        self.assertRaises(NoApplicableMethodError, frob, 'x')


TestClasses = (
    ClassSourceTests, FallbackTests, CollaboratorTests,
)

def test_suite():
    return TestSuite(
        [TestLoader().loadTestsFromTestCase(t) for t in TestClasses]
    )
