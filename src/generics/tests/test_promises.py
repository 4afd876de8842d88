"""Tests for deferred arguments"""

from unittest import TestCase, TestLoader, TestSuite
from generics import *


class PromiseTests(TestCase):

    def testSourceText(self):
        p = promise('x + 1', {'x': 41})
        self.assertFalse(p.isForced())
        self.assertEqual(p.force(), 42)
        self.assertTrue(p.isForced())
        self.assertEqual(p.globals, None)

    def testForcedOnce(self):
        calls = []
        def compute():
            calls.append(1)
            return 'done'
        p = promise(compute)
        self.assertEqual(force(p), 'done')
        self.assertEqual(force(p), 'done')
        self.assertEqual(calls, [1])

    def testForceOtherValues(self):
        self.assertEqual(force(5), 5)
        self.assertEqual(force(None), None)

    def testBadExpression(self):
        self.assertRaises(TypeError, promise, 5)

    def testRepr(self):
        p = promise('1 + 1')
        self.assertEqual(repr(p), '<Promise 1 + 1>')
        p.force()
        self.assertEqual(repr(p), '<Promise 1 + 1 (forced)>')

    def testProvidesInterface(self):
        self.assertTrue(IPromise.providedBy(promise('1')))


TestClasses = (
    PromiseTests,
)

def test_suite():
    return TestSuite(
        [TestLoader().loadTestsFromTestCase(t) for t in TestClasses]
    )
