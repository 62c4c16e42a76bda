"""
HTTP API tests (router + dependency + error handler wiring).
"""
import pytest


class TestAuth:
    def test_signup_login_me(self, client):
        response = client.post("/api/v1/auth/signup", json={
            "username": "newfan",
            "email": "newfan@example.com",
            "password": "secret123"
        })
        assert response.status_code == 201
        assert response.json()["role"] == "user"

        response = client.post("/api/v1/auth/login", json={"identifier": "newfan@example.com", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["username"] == "newfan"

        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert response.status_code == 200
        assert response.json()["email"] == "newfan@example.com"

    def test_duplicate_signup_is_conflict(self, client, voter):
        response = client.post("/api/v1/auth/signup", json={
            "username": "voter",
            "email": "someone@example.com",
            "password": "secret123"
        })
        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_wrong_password(self, client, voter):
        response = client.post("/api/v1/auth/login", json={"identifier": "voter", "password": "nope"})
        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestCategories:
    def test_admin_creates_category(self, client, admin_headers):
        response = client.post("/api/v1/categories", json={"name": "Best Picture"}, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["max_nominees"] == 10
        assert body["voting_enabled"] is True
        assert body["creator"]["username"] == "boss"

    def test_voter_cannot_create_category(self, client, voter_headers):
        response = client.post("/api/v1/categories", json={"name": "Best Picture"}, headers=voter_headers)
        assert response.status_code == 403

    def test_max_nominees_must_be_positive(self, client, admin_headers):
        response = client.post("/api/v1/categories", json={"name": "Empty", "max_nominees": 0}, headers=admin_headers)
        assert response.status_code == 422

    def test_update_only_sent_fields(self, client, admin_headers, make_category):
        c = make_category(description="keep me")

        response = client.put(f"/api/v1/categories/{c.id}", json={"voting_enabled": False}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["voting_enabled"] is False
        assert response.json()["description"] == "keep me"

    def test_delete_with_active_nominees_is_conflict(self, client, admin_headers, ballot):
        c, _, _ = ballot
        response = client.delete(f"/api/v1/categories/{c.id}", headers=admin_headers)
        assert response.status_code == 409

    def test_unknown_category_is_404(self, client):
        response = client.get("/api/v1/categories/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_ballot_view_is_public(self, client, ballot):
        c, n1, n2 = ballot
        response = client.get("/api/v1/categories/with-nominees")

        assert response.status_code == 200
        entry = response.json()[0]
        assert entry["id"] == c.id
        assert [n["id"] for n in entry["nominees"]] == [n1.id, n2.id]


class TestNominees:
    def test_capacity_exceeded_is_400(self, client, admin_headers, ballot):
        c, _, _ = ballot
        response = client.post("/api/v1/nominees", json={"name": "N3", "category_id": c.id}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "CapacityExceeded"

    def test_pending_media_cannot_be_linked(self, client, admin_headers, make_category, make_media):
        c = make_category()
        media = make_media()

        response = client.post(
            "/api/v1/nominees",
            json={"name": "Photo", "category_id": c.id, "approved_media_id": media.id},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidState"

    def test_clear_media_with_explicit_null(self, client, admin_headers, make_category, make_nominee):
        nominee = make_nominee(make_category(), name="Img", image_url="https://cdn/a.png")

        response = client.put(
            f"/api/v1/nominees/{nominee.id}",
            json={"approved_media_id": None},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["media_type"] == "none"
        assert response.json()["image_url"] is None


class TestVotes:
    def test_cast_and_duplicate(self, client, voter_headers, ballot):
        c, n1, n2 = ballot

        response = client.post("/api/v1/votes", json={"category_id": c.id, "nominee_id": n1.id}, headers=voter_headers)
        assert response.status_code == 201
        assert response.json()["nominee_id"] == n1.id

        response = client.post("/api/v1/votes", json={"category_id": c.id, "nominee_id": n2.id}, headers=voter_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateVote"

    def test_vote_requires_auth(self, client, ballot):
        c, n1, _ = ballot
        response = client.post("/api/v1/votes", json={"category_id": c.id, "nominee_id": n1.id})
        assert response.status_code in (401, 403)

    def test_voting_closed(self, client, voter_headers, admin_headers, ballot):
        c, n1, _ = ballot
        client.put(f"/api/v1/categories/{c.id}", json={"voting_enabled": False}, headers=admin_headers)

        response = client.post("/api/v1/votes", json={"category_id": c.id, "nominee_id": n1.id}, headers=voter_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "VotingClosed"

    def test_results_are_public(self, client, voter_headers, ballot):
        c, n1, _ = ballot
        client.post("/api/v1/votes", json={"category_id": c.id, "nominee_id": n1.id}, headers=voter_headers)

        response = client.get("/api/v1/votes/results", params={"category_id": c.id})

        assert response.status_code == 200
        assert response.json() == [{
            "category_id": c.id,
            "category_name": "Album of the Year",
            "category_description": None,
            "total_votes": 1,
            "nominees": [{"id": n1.id, "name": "N1", "description": None, "vote_count": 1}],
        }]

    def test_my_votes_and_withdraw(self, client, voter_headers, ballot):
        c, n1, _ = ballot
        vote_id = client.post(
            "/api/v1/votes", json={"category_id": c.id, "nominee_id": n1.id}, headers=voter_headers
        ).json()["id"]

        mine = client.get("/api/v1/votes/my", headers=voter_headers).json()
        assert [v["id"] for v in mine] == [vote_id]
        assert mine[0]["category"]["name"] == "Album of the Year"

        response = client.delete(f"/api/v1/votes/my/{c.id}", headers=voter_headers)
        assert response.status_code == 200
        assert response.json()["removed"] == 1

        response = client.delete(f"/api/v1/votes/{vote_id}", headers=voter_headers)
        assert response.status_code == 404


class TestMedia:
    def test_upload_review_and_link(self, client, voter_headers, admin_headers, make_category):
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("poster.png", b"\x89PNG\r\n\x1a\n fake", "image/png")},
            data={"description": "fan art"},
            headers=voter_headers
        )
        assert response.status_code == 201
        media = response.json()
        assert media["status"] == "pending"
        assert media["media_type"] == "photo"
        assert media["original_filename"] == "poster.png"

        pending = client.get("/api/v1/media/pending", headers=admin_headers).json()
        assert [m["id"] for m in pending] == [media["id"]]

        response = client.post(
            "/api/v1/media/review",
            json={"media_id": media["id"], "status": "approved", "admin_notes": "nice"},
            headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["reviewer"]["username"] == "boss"

        c = make_category()
        response = client.post(
            "/api/v1/nominees",
            json={"name": "Fan Art", "category_id": c.id, "approved_media_id": media["id"]},
            headers=admin_headers
        )
        assert response.status_code == 201
        assert response.json()["media_type"] == "image"
        assert response.json()["image_url"] == media["file_path"]

    def test_stored_file_is_served_from_its_public_path(self, client, voter_headers):
        content = b"\x89PNG\r\n\x1a\n served"
        media = client.post(
            "/api/v1/media/upload",
            files={"file": ("served.png", content, "image/png")},
            headers=voter_headers
        ).json()

        response = client.get(media["file_path"])

        assert response.status_code == 200
        assert response.content == content

    def test_disallowed_extension(self, client, voter_headers):
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("script.exe", b"MZ", "application/octet-stream")},
            headers=voter_headers
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("decision", ["pending", "maybe"])
    def test_review_rejects_unknown_decision(self, client, admin_headers, make_media, decision):
        media = make_media()
        response = client.post(
            "/api/v1/media/review",
            json={"media_id": media.id, "status": decision},
            headers=admin_headers
        )
        assert response.status_code == 422

    def test_review_requires_admin(self, client, voter_headers, make_media):
        media = make_media()
        response = client.post(
            "/api/v1/media/review",
            json={"media_id": media.id, "status": "approved"},
            headers=voter_headers
        )
        assert response.status_code == 403

    def test_delete_someone_elses_upload(self, client, make_media, other_voter, headers_for):
        media = make_media()
        response = client.delete(f"/api/v1/media/{media.id}", headers=headers_for(other_voter))
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
