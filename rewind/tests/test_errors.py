"""Tests for error classes."""

import unittest

from rewind.errors import (
    AlreadyConsumedError,
    BorrowError,
    CompensationError,
    InvalidOperationError,
)


class ErrorHierarchyTestCase(unittest.TestCase):
    """Test cases for the error hierarchy."""

    def test_lifecycle_errors_are_invalid_operations(self):
        """Misuse errors share InvalidOperationError as base."""
        self.assertTrue(issubclass(AlreadyConsumedError, InvalidOperationError))
        self.assertTrue(issubclass(BorrowError, InvalidOperationError))

    def test_compensation_error_is_not_invalid_operation(self):
        """Failed compensations are domain failures, not misuse."""
        self.assertFalse(issubclass(CompensationError, InvalidOperationError))


class CompensationErrorTestCase(unittest.TestCase):
    """Test cases for CompensationError."""

    def test_carries_errors_and_results(self):
        """CompensationError keeps the failures and the partial results."""
        errors = [ValueError("a"), KeyError("b")]

        error = CompensationError(errors, [1, 2])

        self.assertEqual(error.errors, errors)
        self.assertEqual(error.results, [1, 2])
        self.assertIn("2 compensation(s) failed", str(error))


if __name__ == '__main__':
    unittest.main()
