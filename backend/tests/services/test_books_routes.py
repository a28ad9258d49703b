"""Books Routes: HTTP contract of the five CRUD endpoints.

Invariants:
    - Success bodies are {"books": [...]}, {"book": {...}} or {"message": ...}
    - Invalid bodies give 400 with one message per violation and touch nothing
    - Unknown isbn gives 404 on get, update and delete
    - PUT forces isbn to the path isbn
"""

import asyncio

import pytest

from tests.services.book_data import NEW_BOOK, TEST_BOOK


MISSING_URL_AND_PAGES = {
    k: v for k, v in NEW_BOOK.items() if k not in ("amazon_url", "pages")
}

INVALID_PAYLOADS = [
    {"isbn": "0123456789"},
    {**NEW_BOOK, "year": "2017"},
    MISSING_URL_AND_PAGES,
]


# ─── GET /books ──────────────────────────────────────────────────

async def test_list_books(client, seed_book):
    res = await client.get("/books")
    assert res.status_code == 200
    assert res.json() == {"books": [seed_book]}


async def test_list_books_empty(client):
    res = await client.get("/books")
    assert res.status_code == 200
    assert res.json() == {"books": []}


# ─── GET /books/{isbn} ───────────────────────────────────────────

async def test_get_book(client, seed_book):
    res = await client.get(f"/books/{seed_book['isbn']}")
    assert res.status_code == 200
    assert res.json() == {"book": TEST_BOOK}


async def test_get_missing_book_returns_404(client, seed_book):
    res = await client.get("/books/0123456789")
    assert res.status_code == 404
    assert res.json()["error"]["status"] == 404
    assert "0123456789" in res.json()["error"]["message"]


# ─── POST /books ─────────────────────────────────────────────────

async def test_create_book(client, seed_book):
    res = await client.post("/books", json=NEW_BOOK)
    assert res.status_code == 201
    assert res.json() == {"book": NEW_BOOK}


async def test_create_then_get_returns_identical_record(client):
    await client.post("/books", json=NEW_BOOK)
    res = await client.get(f"/books/{NEW_BOOK['isbn']}")
    assert res.json() == {"book": NEW_BOOK}


async def test_create_ignores_unknown_properties(client):
    res = await client.post("/books", json={**NEW_BOOK, "rating": 5})
    assert res.status_code == 201
    assert res.json() == {"book": NEW_BOOK}


async def test_create_rejects_invalid_bodies(client, seed_book, fetch_book):
    responses = await asyncio.gather(
        *(client.post("/books", json=p) for p in INVALID_PAYLOADS),
    )
    for res in responses:
        assert res.status_code == 400
        assert res.json()["error"]["status"] == 400
    assert await fetch_book("0123456789") is None
    assert await fetch_book(NEW_BOOK["isbn"]) is None


async def test_create_reports_every_violation(client):
    res = await client.post("/books", json=MISSING_URL_AND_PAGES)
    assert res.json() == {
        "error": {
            "message": [
                'instance requires property "amazon_url"',
                'instance requires property "pages"',
            ],
            "status": 400,
        },
    }


async def test_create_with_string_year_names_the_field(client):
    res = await client.post("/books", json={**NEW_BOOK, "year": "2017"})
    assert res.json()["error"]["message"] == [
        "instance.year is not of a type(s) integer",
    ]


async def test_create_with_array_body_returns_400(client):
    res = await client.post("/books", json=[NEW_BOOK])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == [
        "instance is not of a type(s) object",
    ]


async def test_create_with_malformed_json_returns_400(client):
    res = await client.post(
        "/books", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert isinstance(res.json()["error"]["message"], list)


async def test_create_with_oversized_pages_returns_400(client, fetch_book):
    res = await client.post("/books", json={**NEW_BOOK, "pages": 10**20})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == [
        "instance.pages must be less than or equal to 2147483647",
    ]
    assert await fetch_book(NEW_BOOK["isbn"]) is None


async def test_create_accepts_integral_float_year(client):
    res = await client.post("/books", json={**NEW_BOOK, "year": 2017.0})
    assert res.status_code == 201
    assert res.json() == {"book": NEW_BOOK}


async def test_create_duplicate_isbn_returns_500(client, seed_book):
    res = await client.post("/books", json=TEST_BOOK)
    assert res.status_code == 500
    assert res.json()["error"]["status"] == 500


# ─── PUT /books/{isbn} ───────────────────────────────────────────

async def test_update_book_forces_path_isbn(client, seed_book, fetch_book):
    res = await client.put(f"/books/{seed_book['isbn']}", json=NEW_BOOK)
    expected = {**NEW_BOOK, "isbn": seed_book["isbn"]}
    assert res.status_code == 200
    assert res.json() == {"book": expected}
    assert await fetch_book(seed_book["isbn"]) == expected


@pytest.mark.parametrize("payload", INVALID_PAYLOADS)
async def test_update_rejects_invalid_bodies(
    client, seed_book, fetch_book, payload,
):
    res = await client.put(f"/books/{seed_book['isbn']}", json=payload)
    assert res.status_code == 400
    assert await fetch_book(seed_book["isbn"]) == TEST_BOOK


async def test_update_missing_book_returns_404(client, seed_book, fetch_book):
    res = await client.put("/books/0123456789", json=NEW_BOOK)
    assert res.status_code == 404
    assert await fetch_book("0123456789") is None
    assert await fetch_book(NEW_BOOK["isbn"]) is None


async def test_update_validates_before_lookup(client):
    res = await client.put("/books/0123456789", json={"isbn": "0123456789"})
    assert res.status_code == 400


# ─── DELETE /books/{isbn} ────────────────────────────────────────

async def test_delete_book(client, seed_book):
    res = await client.delete(f"/books/{seed_book['isbn']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Book deleted"}

    res = await client.get(f"/books/{seed_book['isbn']}")
    assert res.status_code == 404


async def test_delete_missing_book_returns_404(client, seed_book, fetch_book):
    res = await client.delete("/books/0123456789")
    assert res.status_code == 404
    assert await fetch_book(seed_book["isbn"]) == TEST_BOOK
