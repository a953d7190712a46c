"""Tests for Atom class."""

import unittest
from unittest import mock

from rewind import simple
from rewind.atom import Atom
from rewind.errors import AlreadyConsumedError


class AtomCreationTestCase(unittest.TestCase):
    """Test cases for Atom creation."""

    def test_create_has_no_side_effect(self):
        """Creating an atom does not run the compensation."""
        compensate = mock.Mock()
        atom = Atom(12, compensate)

        compensate.assert_not_called()
        self.assertTrue(atom.is_active)
        self.assertEqual(atom.value, 12)

    def test_simple_factory(self):
        """simple() builds an Atom."""
        atom = simple("a", str.upper)

        self.assertIsInstance(atom, Atom)
        self.assertEqual(atom.undo(), "A")


class AtomUndoTestCase(unittest.TestCase):
    """Test cases for Atom.undo()."""

    def test_undo_passes_value_and_returns_result(self):
        """undo() calls compensate(value) and returns its result."""
        compensate = mock.Mock(return_value="restored")
        atom = Atom(12, compensate)

        result = atom.undo()

        compensate.assert_called_once_with(12)
        self.assertEqual(result, "restored")
        self.assertFalse(atom.is_active)

    def test_undo_twice_raises_error(self):
        """A second undo() raises and does not compensate again."""
        compensate = mock.Mock()
        atom = Atom(12, compensate)
        atom.undo()

        with self.assertRaises(AlreadyConsumedError):
            atom.undo()
        compensate.assert_called_once_with(12)

    def test_undo_after_cancel_raises_error(self):
        """undo() after cancel() raises and does not compensate."""
        compensate = mock.Mock()
        atom = Atom(12, compensate)
        atom.cancel()

        with self.assertRaises(AlreadyConsumedError):
            atom.undo()
        compensate.assert_not_called()

    def test_failing_compensation_still_consumes(self):
        """A compensation that raises cannot be fired a second time."""
        compensate = mock.Mock(side_effect=RuntimeError("boom"))
        atom = Atom(12, compensate)

        with self.assertRaises(RuntimeError):
            atom.undo()

        self.assertFalse(atom.is_active)
        atom.abandon()
        compensate.assert_called_once_with(12)


class AtomCancelTestCase(unittest.TestCase):
    """Test cases for Atom.cancel()."""

    def test_cancel_returns_value_unchanged(self):
        """cancel() hands back the original value."""
        value = ["a", "b"]
        atom = Atom(value, mock.Mock())

        self.assertIs(atom.cancel(), value)

    def test_cancel_leaves_state_untouched(self):
        """cancel() never runs the compensation."""
        state = {"count": 12}
        atom = Atom(state, lambda s: s.update(count=0))

        atom.cancel()
        atom.abandon()

        self.assertEqual(state, {"count": 12})

    def test_decay_is_cancel(self):
        """decay() commits like cancel()."""
        compensate = mock.Mock()
        atom = Atom(1, compensate)

        self.assertEqual(atom.decay(), 1)
        self.assertFalse(atom.is_active)
        compensate.assert_not_called()

    def test_cancel_twice_raises_error(self):
        """A second cancel() raises."""
        atom = Atom(1, mock.Mock())
        atom.cancel()

        with self.assertRaises(AlreadyConsumedError):
            atom.cancel()

    def test_value_after_cancel_raises_error(self):
        """value is not readable once consumed."""
        atom = Atom(1, mock.Mock())
        atom.cancel()

        with self.assertRaises(AlreadyConsumedError):
            atom.value


class AtomAbandonTestCase(unittest.TestCase):
    """Test cases for abandoning an Atom."""

    def test_abandon_equals_calling_compensation(self):
        """Abandoning has the same effect as compensate(value)."""
        scoped = {"value": 12}

        def reset(target):
            target["value"] = 0

        with Atom(scoped, reset):
            pass

        self.assertEqual(scoped, {"value": 0})

    def test_abandon_on_exception(self):
        """The compensation fires when the block raises, and the error propagates."""
        compensate = mock.Mock()

        with self.assertRaises(ValueError):
            with Atom(12, compensate):
                raise ValueError("domain failure")

        compensate.assert_called_once_with(12)

    def test_abandon_on_early_return(self):
        """The compensation fires on an early return."""
        compensate = mock.Mock()

        def operation():
            with Atom(12, compensate):
                return "early"

        self.assertEqual(operation(), "early")
        compensate.assert_called_once_with(12)

    def test_commit_inside_block(self):
        """Cancelling inside the block suppresses the compensation."""
        compensate = mock.Mock()

        with Atom(12, compensate) as atom:
            committed = atom.cancel()

        self.assertEqual(committed, 12)
        compensate.assert_not_called()

    def test_abandon_after_undo_is_noop(self):
        """Leaving the block after undo() does not compensate again."""
        compensate = mock.Mock()

        with Atom(12, compensate) as atom:
            atom.undo()

        compensate.assert_called_once_with(12)


class AtomReprTestCase(unittest.TestCase):
    """Test cases for Atom.__repr__()."""

    def test_repr(self):
        """repr() shows the value, or that it was consumed."""
        atom = Atom(12, mock.Mock())
        self.assertEqual(repr(atom), "Atom(12)")

        atom.cancel()
        self.assertEqual(repr(atom), "Atom(<consumed>)")


if __name__ == '__main__':
    unittest.main()
