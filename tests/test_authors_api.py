"""
End-to-end tests for the author endpoints.

Requests go through the full application (middlewares, routers,
commands, repositories) against a fresh in-memory SQLite database.
"""

from novels_api.constants import BAD_REQUEST_MESSAGE, PATCH_SUCCESS_MESSAGE


class TestListAuthors:
    """Tests for GET /api/authors."""

    def test_empty_collection(self, client):
        response = client.get("/api/authors")

        assert response.status_code == 200
        assert response.json() == {
            "type": "success",
            "statusCode": 200,
            "count": 0,
            "authors": [],
        }

    def test_count_matches_records(self, client, create_author):
        create_author("Isaac Asimov")
        create_author("Arthur C. Clarke")

        body = client.get("/api/authors").json()

        assert body["count"] == 2
        assert [a["name"] for a in body["authors"]] == [
            "Isaac Asimov",
            "Arthur C. Clarke",
        ]
        assert all("href" in a and "novels" in a for a in body["authors"])


class TestCreateAuthor:
    """Tests for POST /api/authors."""

    def test_created_with_location(self, client):
        response = client.post(
            "/api/authors",
            json={"name": "Isaac Asimov", "nationality": "American"},
        )

        body = response.json()
        author = body["author"]
        assert response.status_code == 201
        assert response.headers["location"] == f"/api/authors/{author['id']}"
        assert body["type"] == "success"
        assert body["statusCode"] == 201
        assert body["message"] == "Author was successfully created"
        assert author["name"] == "Isaac Asimov"
        assert author["nationality"] == "American"
        assert author["href"] == f"/api/authors/{author['id']}"
        assert author["novels"] == f"/api/authors/{author['id']}/novels"

    def test_default_nationality(self, client):
        response = client.post("/api/authors", json={"name": "Stanisław Lem"})

        assert response.json()["author"]["nationality"] == "Unknown"

    def test_explicit_null_nationality_is_kept(self, client):
        response = client.post(
            "/api/authors", json={"name": "B. Traven", "nationality": None}
        )

        author = response.json()["author"]
        assert response.status_code == 201
        assert author["nationality"] is None
        persisted = client.get(f"/api/authors/{author['id']}").json()
        assert persisted["author"]["nationality"] is None

    def test_unknown_keys_and_id_are_ignored(self, client):
        response = client.post(
            "/api/authors",
            json={"id": 999, "name": "Philip K. Dick", "shoeSize": 44},
        )

        author = response.json()["author"]
        assert response.status_code == 201
        assert author["id"] != 999
        assert "shoeSize" not in author

    def test_duplicate_name_is_conflict(self, client, create_author):
        create_author("Isaac Asimov")

        response = client.post("/api/authors", json={"name": "Isaac Asimov"})

        body = response.json()
        assert response.status_code == 409
        assert body["type"] == "error"
        assert body["statusCode"] == 409
        assert "name" in body["fields"]

    def test_missing_name_is_validation_error(self, client):
        response = client.post("/api/authors", json={"nationality": "British"})

        body = response.json()
        assert response.status_code == 422
        assert body["statusCode"] == 422
        assert body["message"] == "Missing required fields."
        assert body["fields"] == ["name"]


class TestGetAuthor:
    """Tests for GET /api/authors/:id."""

    def test_found(self, client, create_author):
        author = create_author("Ursula K. Le Guin")

        response = client.get(f"/api/authors/{author['id']}")

        body = response.json()
        assert response.status_code == 200
        assert body["type"] == "success"
        assert body["author"] == author

    def test_not_found(self, client):
        response = client.get("/api/authors/12345")

        body = response.json()
        assert response.status_code == 404
        assert body["statusCode"] == 404
        assert "not found" in body["message"]

    def test_non_integer_id_is_not_found(self, client):
        response = client.get("/api/authors/abc")

        assert response.status_code == 404
        assert response.json()["type"] == "error"

    def test_id_beyond_integer_column_is_not_found(self, client):
        url = "/api/authors/99999999999999999999"

        for response in (client.get(url), client.delete(url)):
            assert response.status_code == 404
            assert response.json()["statusCode"] == 404

    def test_zero_id_is_not_found(self, client):
        assert client.get("/api/authors/0").status_code == 404

    def test_related_novels(self, client, create_author, create_novel):
        author = create_author()
        other = create_author("Frank Herbert")
        create_novel("Foundation", authorId=author["id"])
        create_novel("I, Robot", authorId=author["id"])
        create_novel("Dune", authorId=other["id"])

        response = client.get(f"/api/authors/{author['id']}/novels")

        body = response.json()
        assert response.status_code == 200
        assert body["count"] == 2
        assert {n["name"] for n in body["novels"]} == {"Foundation", "I, Robot"}
        assert all("characters" in n for n in body["novels"])

    def test_related_novels_of_missing_author(self, client):
        response = client.get("/api/authors/77/novels")

        assert response.status_code == 404


class TestReplaceAuthor:
    """Tests for PUT /api/authors/:id."""

    def test_replace_all_fields(self, client, create_author):
        author = create_author("Isaac Asimov")

        response = client.put(
            f"/api/authors/{author['id']}",
            json={"name": "Isaac Asimov", "nationality": "Russian-American"},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["message"] == "Author successfully updated"
        assert body["author"]["nationality"] == "Russian-American"
        persisted = client.get(f"/api/authors/{author['id']}").json()
        assert persisted["author"]["nationality"] == "Russian-American"

    def test_missing_field_is_bad_request(self, client, create_author):
        author = create_author()

        response = client.put(
            f"/api/authors/{author['id']}", json={"name": "Someone"}
        )

        body = response.json()
        assert response.status_code == 400
        assert body["statusCode"] == 400
        assert body["message"] == BAD_REQUEST_MESSAGE

    def test_empty_body_is_bad_request(self, client, create_author):
        author = create_author()

        response = client.put(f"/api/authors/{author['id']}")

        assert response.status_code == 400

    def test_missing_author(self, client):
        response = client.put(
            "/api/authors/5", json={"name": "A", "nationality": "B"}
        )

        assert response.status_code == 404

    def test_duplicate_name_is_conflict(self, client, create_author):
        create_author("Isaac Asimov")
        other = create_author("Frank Herbert")

        response = client.put(
            f"/api/authors/{other['id']}",
            json={"name": "Isaac Asimov", "nationality": "American"},
        )

        assert response.status_code == 409
        assert response.json()["fields"] == ["name"]


class TestPatchAuthor:
    """Tests for PATCH /api/authors/:id."""

    def test_partial_update(self, client, create_author):
        author = create_author("Isaac Asimov", nationality="Russian")

        response = client.patch(
            f"/api/authors/{author['id']}", json={"nationality": "American"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["message"] == PATCH_SUCCESS_MESSAGE
        assert body["author"]["name"] == "Isaac Asimov"
        assert body["author"]["nationality"] == "American"

    def test_repeated_patch_is_idempotent(self, client, create_author):
        author = create_author()
        url = f"/api/authors/{author['id']}"

        first = client.patch(url, json={"nationality": "American"})
        second = client.patch(url, json={"nationality": "American"})

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()

    def test_null_name_is_validation_error(self, client, create_author):
        author = create_author()

        response = client.patch(
            f"/api/authors/{author['id']}", json={"name": None}
        )

        assert response.status_code == 422
        assert response.json()["fields"] == ["name"]

    def test_missing_author(self, client):
        response = client.patch("/api/authors/5", json={"name": "A"})

        assert response.status_code == 404


class TestDeleteAuthor:
    """Tests for DELETE /api/authors/:id."""

    def test_delete(self, client, create_author):
        author = create_author()

        response = client.delete(f"/api/authors/{author['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/authors/{author['id']}").status_code == 404

    def test_delete_missing(self, client):
        response = client.delete("/api/authors/404")

        assert response.status_code == 404
        assert response.json()["type"] == "error"

    def test_novels_are_kept_without_author(
        self, client, create_author, create_novel
    ):
        author = create_author()
        novel = create_novel(authorId=author["id"])

        client.delete(f"/api/authors/{author['id']}")

        response = client.get(f"/api/novels/{novel['id']}")
        assert response.status_code == 200
        assert response.json()["novel"]["authorId"] is None


class TestUnroutedRequests:
    """Requests no endpoint handles still get an error envelope."""

    def test_unknown_path(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {
            "type": "error",
            "statusCode": 404,
            "message": "Resource not found.",
        }

    def test_method_not_allowed(self, client):
        response = client.post("/api/authors/1", json={"name": "A"})

        body = response.json()
        assert response.status_code == 405
        assert body["type"] == "error"
        assert body["statusCode"] == 405
        assert "POST" not in response.headers["allow"]
        assert "GET" in response.headers["allow"]
