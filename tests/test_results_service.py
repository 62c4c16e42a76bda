from app.models.vote import Vote
from app.services import nominee_service, results_service, vote_service, user_service


def _make_voters(db, count):
    return [
        user_service.create_user(db, username=f"fan{i}", email=f"fan{i}@example.com", password="password")
        for i in range(count)
    ]


def test_no_votes_means_no_results(db, ballot):
    assert results_service.compute_results(db) == []


def test_totals_match_vote_rows(db, make_category, make_nominee):
    c = make_category(name="Song")
    a = make_nominee(c, name="A")
    b = make_nominee(c, name="B")
    d = make_category(name="Video")
    x = make_nominee(d, name="X")

    fans = _make_voters(db, 5)
    for fan in fans[:3]:
        vote_service.cast_vote(db, fan.id, c.id, a.id)
    for fan in fans[3:]:
        vote_service.cast_vote(db, fan.id, c.id, b.id)
    for fan in fans[:4]:
        vote_service.cast_vote(db, fan.id, d.id, x.id)

    results = results_service.compute_results(db)

    for result in results:
        rows = db.query(Vote).filter(Vote.category_id == result.category_id).count()
        assert result.total_votes == sum(n.vote_count for n in result.nominees) == rows


def test_ordering_and_zero_vote_nominees_absent(db, make_category, make_nominee):
    zebra = make_category(name="Zebra Award", display_order=0)
    alpha = make_category(name="Alpha Award", display_order=1)
    low = make_nominee(alpha, name="Low", display_order=1)
    high = make_nominee(alpha, name="High", display_order=2)
    silent = make_nominee(alpha, name="Silent", display_order=3)
    z = make_nominee(zebra, name="Z")

    fans = _make_voters(db, 3)
    vote_service.cast_vote(db, fans[0].id, alpha.id, low.id)
    vote_service.cast_vote(db, fans[1].id, alpha.id, high.id)
    vote_service.cast_vote(db, fans[2].id, alpha.id, high.id)
    vote_service.cast_vote(db, fans[0].id, zebra.id, z.id)

    results = results_service.compute_results(db)

    assert [r.category_name for r in results] == ["Alpha Award", "Zebra Award"]
    alpha_result = results[0]
    assert [n.name for n in alpha_result.nominees] == ["High", "Low"]
    assert [n.vote_count for n in alpha_result.nominees] == [2, 1]
    assert silent.id not in {n.id for n in alpha_result.nominees}
    assert alpha_result.total_votes == 3


def test_ties_follow_ballot_order(db, make_category, make_nominee):
    c = make_category(name="Tie Break")
    second = make_nominee(c, name="Second", display_order=2)
    first = make_nominee(c, name="First", display_order=1)

    fans = _make_voters(db, 2)
    vote_service.cast_vote(db, fans[0].id, c.id, second.id)
    vote_service.cast_vote(db, fans[1].id, c.id, first.id)

    result = results_service.compute_results(db, c.id)[0]
    assert [n.id for n in result.nominees] == [first.id, second.id]


def test_filter_by_category(db, ballot, make_category, make_nominee, voter):
    c, n1, _ = ballot
    other = make_category(name="Other")
    o1 = make_nominee(other, name="O1")
    vote_service.cast_vote(db, voter.id, c.id, n1.id)
    vote_service.cast_vote(db, voter.id, other.id, o1.id)

    results = results_service.compute_results(db, other.id)

    assert [r.category_id for r in results] == [other.id]
    assert results[0].category_name == "Other"


def test_deleted_nominee_disappears_from_results(db, ballot, voter, other_voter):
    c, n1, n2 = ballot
    vote_service.cast_vote(db, voter.id, c.id, n1.id)
    vote_service.cast_vote(db, other_voter.id, c.id, n2.id)

    removed = nominee_service.delete_nominee(db, n1.id)

    assert removed == 1
    assert db.query(Vote).filter(Vote.nominee_id == n1.id).count() == 0
    result = results_service.compute_results(db, c.id)[0]
    assert [n.id for n in result.nominees] == [n2.id]
    assert result.total_votes == 1
