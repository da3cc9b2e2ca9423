"""Tests for the visited ledger."""

import pytest

from statespace.search.ledger import LedgerEntry, StateNotFoundError, VisitedLedger


class TestSeenSetMode:
    """Breadth-first and depth-first admission."""

    def test_admits_once(self):
        ledger = VisitedLedger()
        assert ledger.admit('a', 0) is True
        assert ledger.admit('a', 0) is False
        assert ledger.admit('a', 5, 'x') is False
        assert len(ledger) == 1

    def test_cheaper_path_not_readmitted(self):
        """Seen-set mode ignores cost entirely."""
        ledger = VisitedLedger(dominance=False)
        ledger.admit('a', 10, 'x')
        assert ledger.admit('a', 1, 'y') is False
        assert ledger.entry('a') == LedgerEntry(10, 'x')


class TestDominanceMode:
    """Uniform-cost and A* admission."""

    @pytest.fixture
    def ledger(self):
        return VisitedLedger(dominance=True)

    def test_first_admission(self, ledger):
        assert ledger.admit('s', 0)
        assert ledger.cost_of('s') == 0
        assert ledger.parent_of('s') is None

    def test_cheaper_path_overwrites(self, ledger):
        """A state reached at 10 and later at 4 keeps cost 4 and the new parent."""
        assert ledger.admit('x', 10, 's')
        assert ledger.admit('x', 4, 'b')
        assert ledger.cost_of('x') == 4
        assert ledger.parent_of('x') == 'b'
        assert ledger.readmissions == 1

    def test_equal_or_higher_cost_rejected(self, ledger):
        ledger.admit('x', 4, 'b')
        assert ledger.admit('x', 4, 'c') is False
        assert ledger.admit('x', 7, 'd') is False
        assert ledger.parent_of('x') == 'b'

    def test_is_stale(self, ledger):
        ledger.admit('x', 10, 's')
        assert not ledger.is_stale('x', 10)
        ledger.admit('x', 4, 'b')
        assert ledger.is_stale('x', 10)
        assert not ledger.is_stale('x', 4)
        assert not ledger.is_stale('unknown', 1)


class TestLedgerInspection:
    """Test lookups and conversion."""

    def test_missing_state(self):
        ledger = VisitedLedger()
        with pytest.raises(StateNotFoundError):
            ledger.entry('nope')
        with pytest.raises(KeyError):
            ledger.parent_of('nope')

    def test_container_protocol(self):
        ledger = VisitedLedger()
        ledger.admit((0, 0), 0)
        ledger.admit((0, 1), 1, (0, 0))
        assert (0, 1) in ledger
        assert (5, 5) not in ledger
        assert list(ledger) == [(0, 0), (0, 1)]
        assert dict(ledger.items())[(0, 1)] == LedgerEntry(1, (0, 0))

    def test_to_dict(self):
        ledger = VisitedLedger(dominance=True)
        ledger.admit('a', 0)
        ledger.admit('b', 2, 'a')
        assert ledger.to_dict() == {
            'a': {'cost': 0, 'parent': None},
            'b': {'cost': 2, 'parent': 'a'},
        }
        assert 'dominance' in repr(ledger)

    def test_none_is_an_ordinary_state(self):
        """A parent of None is a real predecessor, not an origin marker."""
        ledger = VisitedLedger()
        ledger.admit(None, 0)
        ledger.admit('a', 1, None)
        assert ledger.is_origin(None)
        assert not ledger.is_origin('a')
        assert ledger.entry('a') == LedgerEntry(1, None)
        assert ledger.entry(None) == LedgerEntry(0, None, origin=True)
