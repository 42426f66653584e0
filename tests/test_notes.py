"""
Tests: notes store CRUD, ownership scoping and daily quota
"""
from datetime import datetime, timedelta, timezone

from devfeed import crud, schemas
from devfeed.models import Note

ALICE = {"X-User-Email": "alice@example.com"}
BOB = {"X-User-Email": "bob@example.com"}


def create(client, headers=ALICE, **body):
    body.setdefault("title", "Note")
    return client.post("/api/notes", json=body, headers=headers)


class TestIdentity:

    def test_missing_email_is_400(self, client):
        response = client.get("/api/notes")
        assert response.status_code == 400
        assert response.json() == {"detail": "User email is required"}

    def test_blank_email_is_400(self, client):
        response = client.post("/api/notes", json={"title": "x"}, headers={"X-User-Email": "  "})
        assert response.status_code == 400


class TestNotesCrud:

    def test_create_and_fetch(self, client):
        response = create(client, title="Ideas", content="ship it", order=2)
        assert response.status_code == 201
        note = response.json()
        assert note["title"] == "Ideas"
        assert note["content"] == "ship it"
        assert note["order"] == 2

        fetched = client.get(f"/api/notes/{note['id']}", headers=ALICE)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Ideas"

    def test_title_is_required(self, client):
        response = client.post("/api/notes", json={"content": "x"}, headers=ALICE)
        assert response.status_code == 422

    def test_update_only_given_fields(self, client):
        note_id = create(client, title="Old", content="keep").json()["id"]

        response = client.put(f"/api/notes/{note_id}", json={"title": "New"}, headers=ALICE)

        assert response.status_code == 200
        assert response.json()["title"] == "New"
        assert response.json()["content"] == "keep"

    def test_delete(self, client):
        note_id = create(client).json()["id"]

        assert client.delete(f"/api/notes/{note_id}", headers=ALICE).status_code == 204
        assert client.get(f"/api/notes/{note_id}", headers=ALICE).status_code == 404

    def test_other_users_note_is_not_found(self, client):
        note_id = create(client, headers=ALICE).json()["id"]

        assert client.get(f"/api/notes/{note_id}", headers=BOB).status_code == 404
        assert client.put(f"/api/notes/{note_id}", json={"title": "x"}, headers=BOB).status_code == 404
        assert client.delete(f"/api/notes/{note_id}", headers=BOB).status_code == 404
        assert client.get(f"/api/notes/{note_id}", headers=ALICE).status_code == 200


class TestListingAndOrder:

    def test_lists_own_notes_by_order(self, client):
        create(client, title="second", order=1)
        create(client, title="first", order=0)
        create(client, headers=BOB, title="bob's")

        data = client.get("/api/notes", headers=ALICE).json()

        assert [n["title"] for n in data["notes"]] == ["first", "second"]
        assert data["total"] == 2
        assert data["pages"] == 1

    def test_pagination(self, client):
        for i in range(3):
            create(client, title=f"n{i}", order=i)

        page_two = client.get("/api/notes?page=2&limit=2", headers=ALICE).json()

        assert [n["title"] for n in page_two["notes"]] == ["n2"]
        assert page_two["page"] == 2
        assert page_two["pages"] == 2

    def test_invalid_page_is_422(self, client):
        assert client.get("/api/notes?page=0", headers=ALICE).status_code == 422
        assert client.get("/api/notes?limit=101", headers=ALICE).status_code == 422

    def test_reorder_touches_only_own_notes(self, client):
        a = create(client, title="a", order=0).json()["id"]
        b = create(client, title="b", order=1).json()["id"]
        bobs = create(client, headers=BOB, title="bob", order=0).json()["id"]

        response = client.put(
            "/api/notes/reorder",
            json={"notes": [{"id": a, "order": 5}, {"id": b, "order": 0}, {"id": bobs, "order": 9}]},
            headers=ALICE,
        )

        assert response.json() == {"updated": 2}
        titles = [n["title"] for n in client.get("/api/notes", headers=ALICE).json()["notes"]]
        assert titles == ["b", "a"]
        assert client.get(f"/api/notes/{bobs}", headers=BOB).json()["order"] == 0


class TestDailyQuota:

    def test_limit_per_user_per_day(self, client):
        # test_settings allows 3 notes a day
        for _ in range(3):
            assert create(client).status_code == 201

        response = create(client)
        assert response.status_code == 429

        assert create(client, headers=BOB).status_code == 201

    def test_notes_from_previous_days_do_not_count(self, client, session_factory):
        db = session_factory()
        yesterday = datetime.now(timezone.utc) - timedelta(days=1, hours=1)
        for i in range(3):
            db.add(Note(user_email="alice@example.com", title=f"old{i}", created_at=yesterday))
        db.commit()
        db.close()

        assert create(client).status_code == 201

    def test_start_of_utc_day(self):
        now = datetime(2024, 11, 1, 23, 59, tzinfo=timezone.utc)
        assert crud.start_of_utc_day(now) == datetime(2024, 11, 1, tzinfo=timezone.utc)


class TestNoteSchema:

    def test_response_schema_reads_orm_objects(self, session_factory):
        db = session_factory()
        note = crud.create_note(db, "alice@example.com", schemas.NoteCreate(title="t", content="c"))

        dumped = schemas.Note.model_validate(note).model_dump()
        db.close()

        assert dumped["title"] == "t"
        assert dumped["content"] == "c"
        assert dumped["order"] == 0
        assert "user_email" not in dumped
