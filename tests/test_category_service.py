import pytest

from app.core.exceptions import NotFound, Conflict
from app.models.category import current_year, DEFAULT_MAX_NOMINEES
from app.models.nominee import Nominee
from app.models.vote import Vote
from app.services import category_service, nominee_service, vote_service


def test_create_applies_defaults(make_category, admin):
    c = make_category(name="Best Score", description=None)

    assert c.is_active is True
    assert c.voting_enabled is True
    assert c.allow_multiple_votes is False
    assert c.max_nominees == DEFAULT_MAX_NOMINEES
    assert c.display_order == 0
    assert c.year == current_year()
    assert c.created_by == admin.id


def test_partial_update_touches_only_given_fields(db, make_category):
    c = make_category(name="Best Score", description="original", max_nominees=5)

    updated = category_service.update_category(db, c.id, {"voting_enabled": False})

    assert updated.voting_enabled is False
    assert updated.name == "Best Score"
    assert updated.description == "original"
    assert updated.max_nominees == 5


def test_get_unknown_category(db):
    with pytest.raises(NotFound):
        category_service.get_category(db, "missing")


class TestDelete:
    def test_conflict_while_active_nominees_remain(self, db, ballot):
        c, _, _ = ballot

        with pytest.raises(Conflict):
            category_service.delete_category(db, c.id)

        assert category_service.get_category(db, c.id).id == c.id

    def test_delete_after_nominees_removed(self, db, ballot):
        c, n1, n2 = ballot
        nominee_service.delete_nominee(db, n1.id)
        nominee_service.delete_nominee(db, n2.id)

        category_service.delete_category(db, c.id)

        with pytest.raises(NotFound):
            category_service.get_category(db, c.id)

    def test_inactive_nominees_and_votes_removed_with_category(self, db, ballot, voter):
        c, n1, n2 = ballot
        vote_service.cast_vote(db, voter.id, c.id, n1.id)
        nominee_service.update_nominee(db, n1.id, {"is_active": False})
        nominee_service.delete_nominee(db, n2.id)

        category_service.delete_category(db, c.id)

        assert db.query(Nominee).filter(Nominee.category_id == c.id).count() == 0
        assert db.query(Vote).filter(Vote.category_id == c.id).count() == 0

    def test_unknown_category(self, db):
        with pytest.raises(NotFound):
            category_service.delete_category(db, "missing")


class TestBallot:
    def test_categories_in_display_order(self, db, make_category):
        later = make_category(name="Later", display_order=2)
        first = make_category(name="First", display_order=1)

        listed = category_service.list_categories(db)

        assert [c.id for c in listed] == [first.id, later.id]

    def test_active_only_hides_inactive_categories(self, db, make_category):
        shown = make_category(name="Shown")
        make_category(name="Hidden", is_active=False)

        assert [c.id for c in category_service.list_categories(db, active_only=True)] == [shown.id]
        assert len(category_service.list_categories(db)) == 2

    def test_with_nominees_has_live_counts(self, db, ballot, voter, other_voter):
        c, n1, n2 = ballot
        vote_service.cast_vote(db, voter.id, c.id, n2.id)
        vote_service.cast_vote(db, other_voter.id, c.id, n2.id)

        entry = category_service.get_category_with_nominees(db, c.id)

        assert entry.name == "Album of the Year"
        assert [(n.id, n.vote_count) for n in entry.nominees] == [(n1.id, 0), (n2.id, 2)]

    def test_with_nominees_skips_inactive_nominees(self, db, ballot, make_category):
        c, n1, n2 = ballot
        empty = make_category(name="Empty", display_order=5)
        nominee_service.update_nominee(db, n1.id, {"is_active": False})

        entries = category_service.list_categories_with_nominees(db, active_only=True)

        assert [e.id for e in entries] == [c.id, empty.id]
        assert [n.id for n in entries[0].nominees] == [n2.id]
        assert entries[1].nominees == []
