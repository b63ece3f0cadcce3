from bson import ObjectId

from database.connection import SONGS
from conftest import bearer

SONG = {
    "title": "Bohemian Rhapsody",
    "author": "Queen",
    "length": 354,
    "cover": "https://example.com/queen.jpg",
}


def create(client, token, song=SONG):
    resp = client.post("/songs", json=song, headers=bearer(token))
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


# =====================================================
# * Crear y leer
# =====================================================
def test_created_song_is_listed_and_fetchable(client, admin_token):
    created = create(client, admin_token)
    for key, value in SONG.items():
        assert created[key] == value
    assert created["_id"]
    assert created["created_at"] == created["updated_at"]

    listed = client.get("/songs").json()
    assert listed["success"] is True
    assert listed["data"] == [created]

    fetched = client.get(f"/songs/{created['_id']}").json()
    assert fetched == {"success": True, "data": created}


def test_optional_fields_may_be_omitted(client, admin_token):
    created = create(client, admin_token, {"title": "Intro", "author": "The xx"})
    assert created["length"] is None
    assert created["cover"] is None


def test_create_without_title_or_author_is_rejected(client, admin_token, db):
    for song in ({"author": "Queen"}, {"title": "Bohemian Rhapsody"}, {"title": "", "author": "Queen"}):
        resp = client.post("/songs", json=song, headers=bearer(admin_token))
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Required fields missing"}
    assert db[SONGS].count_documents({}) == 0


def test_create_with_malformed_body(client, admin_token):
    resp = client.post(
        "/songs",
        content="{not json",
        headers={**bearer(admin_token), "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid request body"}


def test_unknown_fields_are_not_persisted(client, admin_token, db):
    created = create(client, admin_token, {**SONG, "role": "admin"})
    assert "role" not in db[SONGS].find_one({"_id": ObjectId(created["_id"])})


def test_get_unknown_song_returns_null(client):
    assert client.get(f"/songs/{ObjectId()}").json() == {"success": True, "data": None}
    assert client.get("/songs/not-an-id").json() == {"success": True, "data": None}


# =====================================================
# * Búsqueda
# =====================================================
def test_search_is_case_insensitive_substring_on_title(client, admin_token):
    song = create(client, admin_token)
    create(client, admin_token, {"title": "Roxanne", "author": "The Police"})

    found = client.get("/songs/search", params={"q": "RHAPS"}).json()
    assert found == {"success": True, "data": [song]}


def test_search_does_not_match_author(client, admin_token):
    create(client, admin_token)
    assert client.get("/songs/search", params={"q": "queen"}).json()["data"] == []


def test_search_without_match_returns_empty_list(client, admin_token):
    create(client, admin_token)
    assert client.get("/songs/search", params={"q": "zzz"}).json() == {"success": True, "data": []}


def test_search_treats_query_literally(client, admin_token):
    create(client, admin_token, {"title": "Why? (Live)", "author": "Bronski Beat"})
    create(client, admin_token, {"title": "Why Not", "author": "Someone"})
    data = client.get("/songs/search", params={"q": "why? ("}).json()["data"]
    assert [s["title"] for s in data] == ["Why? (Live)"]


def test_search_without_query_returns_everything(client, admin_token):
    create(client, admin_token)
    create(client, admin_token, {"title": "Roxanne", "author": "The Police"})
    assert len(client.get("/songs/search").json()["data"]) == 2


# =====================================================
# * Actualizar
# =====================================================
def test_update_overwrites_only_given_fields(client, admin_token):
    song = create(client, admin_token)
    resp = client.put(
        f"/songs/{song['_id']}",
        json={"title": "Bohemian Rhapsody (Remastered)", "author": "Queen"},
        headers=bearer(admin_token),
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["title"] == "Bohemian Rhapsody (Remastered)"
    assert updated["length"] == SONG["length"]
    assert updated["cover"] == SONG["cover"]
    assert updated["created_at"] == song["created_at"]

    fetched = client.get(f"/songs/{song['_id']}").json()["data"]
    assert fetched == updated


def test_update_requires_title_and_author(client, admin_token):
    song = create(client, admin_token)
    resp = client.put(f"/songs/{song['_id']}", json={"length": 10}, headers=bearer(admin_token))
    assert resp.status_code == 400
    assert client.get(f"/songs/{song['_id']}").json()["data"]["length"] == SONG["length"]


def test_update_unknown_song(client, admin_token):
    resp = client.put(f"/songs/{ObjectId()}", json=SONG, headers=bearer(admin_token))
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Song not found"}


# =====================================================
# * Eliminar
# =====================================================
def test_delete_then_fetch_returns_null(client, admin_token):
    song = create(client, admin_token)
    resp = client.delete(f"/songs/{song['_id']}", headers=bearer(admin_token))
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Song deleted"}
    assert client.get(f"/songs/{song['_id']}").json()["data"] is None


def test_delete_unknown_song_is_not_found(client, admin_token):
    song = create(client, admin_token)
    client.delete(f"/songs/{song['_id']}", headers=bearer(admin_token))
    resp = client.delete(f"/songs/{song['_id']}", headers=bearer(admin_token))
    assert resp.status_code == 404
    assert client.delete("/songs/garbage", headers=bearer(admin_token)).status_code == 404


# =====================================================
# * Autorización de las operaciones de escritura
# =====================================================
def test_mutations_require_token(client, admin_token, db):
    song = create(client, admin_token)
    assert client.post("/songs", json=SONG).status_code == 401
    assert client.put(f"/songs/{song['_id']}", json=SONG).status_code == 401
    assert client.delete(f"/songs/{song['_id']}").status_code == 401
    assert db[SONGS].count_documents({}) == 1


def test_mutations_reject_ordinary_role(client, admin_token, user_token, db):
    song = create(client, admin_token)
    headers = bearer(user_token)
    for resp in (
        client.post("/songs", json=SONG, headers=headers),
        client.put(f"/songs/{song['_id']}", json=SONG, headers=headers),
        client.delete(f"/songs/{song['_id']}", headers=headers),
    ):
        assert resp.status_code == 403
        assert resp.json()["message"] == "Admin access required"
    assert db[SONGS].count_documents({}) == 1


def test_mutations_reject_revoked_token(client, admin_token):
    client.post("/logout", headers=bearer(admin_token))
    resp = client.post("/songs", json=SONG, headers=bearer(admin_token))
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token revoked"


def test_reads_are_public(client, user_token):
    assert client.get("/songs").status_code == 200
    assert client.get("/songs/search", params={"q": "x"}).status_code == 200


def test_update_can_clear_optional_fields(client, admin_token):
    song = create(client, admin_token)
    resp = client.put(
        f"/songs/{song['_id']}",
        json={"title": song["title"], "author": song["author"], "length": None, "cover": None},
        headers=bearer(admin_token),
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["length"] is None
    assert updated["cover"] is None
