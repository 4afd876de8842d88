from unittest import TestSuite


def test_suite():

    from generics.tests import test_classes, test_properties, test_objects, \
        test_dispatch, test_chaining, test_legacy, test_external, \
        test_promises

    return TestSuite([
        test_classes.test_suite(),
        test_properties.test_suite(),
        test_objects.test_suite(),
        test_dispatch.test_suite(),
        test_chaining.test_suite(),
        test_legacy.test_suite(),
        test_external.test_suite(),
        test_promises.test_suite(),
    ])
