"""Tests for transaction visibility rules."""

from datetime import date

from cofi.domain.visibility import resolve_all, resolve_visible


def _scenario(txn_factory):
    return [
        txn_factory(id=1, owner_id=1, amount="-50", category="Food", date_value=date(2024, 6, 1), is_public=False),
        txn_factory(id=2, owner_id=2, amount="-30", category="Food", date_value=date(2024, 6, 2), is_public=True),
    ]


def _ids(visible):
    return [v.transaction.id for v in visible]


def test_owner_sees_own_private_and_public(txn_factory):
    visible = resolve_visible(1, _scenario(txn_factory))
    assert _ids(visible) == [1, 2]


def test_other_viewer_sees_only_public(txn_factory):
    visible = resolve_visible(3, _scenario(txn_factory))
    assert _ids(visible) == [2]


def test_statistics_view_ignores_privacy(txn_factory):
    transactions = _scenario(txn_factory)
    assert _ids(resolve_all(transactions)) == [1, 2]
    assert _ids(resolve_all(transactions, viewer_id=3)) == [1, 2]


def test_visible_and_all_diverge_with_foreign_private(txn_factory):
    """The statistics view includes private transactions the viewer cannot see."""
    transactions = _scenario(txn_factory)
    visible = set(_ids(resolve_visible(2, transactions)))
    everything = set(_ids(resolve_all(transactions)))
    assert visible < everything


def test_visible_is_subset_of_all(txn_factory):
    transactions = [
        txn_factory(id=i, owner_id=owner, is_public=public)
        for i, (owner, public) in enumerate(
            [(1, True), (1, False), (2, True), (2, False), (3, False)], start=1
        )
    ]
    everything = set(_ids(resolve_all(transactions)))
    for viewer in (1, 2, 3, 4):
        visible = set(_ids(resolve_visible(viewer, transactions)))
        assert visible <= everything
        has_foreign_private = any(
            not t.is_public and t.owner_id != viewer for t in transactions
        )
        assert (visible == everything) == (not has_foreign_private)


def test_equal_when_no_foreign_private(txn_factory):
    transactions = [
        txn_factory(id=1, owner_id=1, is_public=False),
        txn_factory(id=2, owner_id=2, is_public=True),
    ]
    assert _ids(resolve_visible(1, transactions)) == _ids(resolve_all(transactions))


def test_is_owner_annotation(txn_factory):
    visible = resolve_visible(1, _scenario(txn_factory))
    assert [v.is_owner for v in visible] == [True, False]

    annotated = resolve_all(_scenario(txn_factory))
    assert all(not v.is_owner for v in annotated)


def test_resolution_does_not_mutate_input(txn_factory):
    transactions = _scenario(txn_factory)
    snapshot = list(transactions)
    resolve_visible(3, transactions)
    resolve_all(transactions)
    assert transactions == snapshot


def test_empty_input():
    assert resolve_visible(1, []) == []
    assert resolve_all([]) == []
