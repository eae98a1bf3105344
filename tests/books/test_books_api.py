"""Book catalog: filters, admin CRUD and validation."""

import pytest

from extensions import db
from modules.books.models import Book


def _count(app) -> int:
    with app.app_context():
        return Book.query.count()


def test_admin_creates_book(client, app, admin, book_data) -> None:
    resp = client.post(
        "/api/books",
        json=book_data(title="  The Hobbit  ", coverImage="https://img.example/hobbit.jpg"),
        headers=admin.headers,
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Book created successfully"
    book = body["book"]
    assert book["title"] == "The Hobbit"
    assert book["createdBy"] == admin.id
    assert book["reviewsDisabled"] is False
    assert book["publicationDate"] == "1937-09-21"
    assert book["coverImage"] == "https://img.example/hobbit.jpg"

    with app.app_context():
        assert Book.query.filter_by(isbn="978-0547928227").one().price == pytest.approx(12.5)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"price": -1}, "Price must be a non-negative number"),
        ({"price": "abc"}, "Price must be a non-negative number"),
        ({"quantity": -2}, "Quantity must be a non-negative integer"),
        ({"quantity": 2.5}, "Quantity must be a non-negative integer"),
        ({"quantity": "two"}, "Quantity must be a non-negative integer"),
        ({"quantity": 10**20}, "Quantity must be a non-negative integer"),
    ],
)
def test_create_rejects_bad_numbers(client, app, admin, book_data, overrides, message) -> None:
    resp = client.post("/api/books", json=book_data(**overrides), headers=admin.headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": message}
    assert _count(app) == 0


def test_create_accepts_zero_price_and_quantity(client, admin, book_data) -> None:
    resp = client.post("/api/books", json=book_data(price=0, quantity="0"), headers=admin.headers)
    assert resp.status_code == 201
    assert resp.get_json()["book"]["quantity"] == 0


def test_create_requires_all_fields(client, app, admin, book_data) -> None:
    data = book_data()
    del data["description"]
    resp = client.post("/api/books", json=data, headers=admin.headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "All required fields must be provided"}
    assert _count(app) == 0


def test_create_rejects_unknown_category_and_condition(client, admin, book_data) -> None:
    assert client.post("/api/books", json=book_data(category="Cookbooks"), headers=admin.headers).status_code == 400
    assert client.post("/api/books", json=book_data(condition="Mint"), headers=admin.headers).status_code == 400


def test_create_rejects_bad_publication_date(client, admin, book_data) -> None:
    resp = client.post("/api/books", json=book_data(publicationDate="someday"), headers=admin.headers)
    assert resp.status_code == 400


def test_isbn_is_unique(client, app, admin, book_data, create_book) -> None:
    create_book()
    resp = client.post("/api/books", json=book_data(title="Another"), headers=admin.headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Book with this ISBN already exists"}
    assert _count(app) == 1


@pytest.mark.parametrize("role", ["user", "manager"])
def test_only_admin_creates_books(client, app, make_user, book_data, role) -> None:
    actor = make_user(role)
    resp = client.post("/api/books", json=book_data(), headers=actor.headers)
    assert resp.status_code == 403
    assert _count(app) == 0


def test_create_requires_authentication(client, book_data) -> None:
    assert client.post("/api/books", json=book_data()).status_code == 401


# ---------- listing and filters ----------

@pytest.fixture()
def catalog(create_book):
    return {
        "hobbit": create_book(),
        "dune": create_book(title="Dune", author="Frank Herbert", isbn="978-0441013593",
                            category="Science Fiction", condition="Like New", price=25),
        "emma": create_book(title="Emma", author="Jane Austen", isbn="978-0141439587",
                            category="Classics", condition="Fair", price=5),
    }


def _titles(resp) -> list:
    assert resp.status_code == 200
    return [b["title"] for b in resp.get_json()]


def test_list_is_newest_first(client, catalog) -> None:
    assert _titles(client.get("/api/books")) == ["Emma", "Dune", "The Hobbit"]


def test_filter_by_category_and_condition(client, catalog) -> None:
    assert _titles(client.get("/api/books?category=Classics")) == ["Emma"]
    assert _titles(client.get("/api/books", query_string={"condition": "Like New"})) == ["Dune"]
    assert _titles(client.get("/api/books?category=Classics&condition=Good")) == []


def test_filter_by_price_range_is_inclusive(client, catalog) -> None:
    assert _titles(client.get("/api/books?minPrice=5&maxPrice=12.5")) == ["Emma", "The Hobbit"]
    assert _titles(client.get("/api/books?minPrice=20")) == ["Dune"]
    assert _titles(client.get("/api/books?maxPrice=5")) == ["Emma"]


def test_search_is_case_insensitive_across_title_author_isbn(client, catalog) -> None:
    assert _titles(client.get("/api/books?search=dUnE")) == ["Dune"]
    assert _titles(client.get("/api/books?search=austen")) == ["Emma"]
    assert _titles(client.get("/api/books?search=0547928")) == ["The Hobbit"]


def test_search_treats_wildcards_literally(client, catalog, create_book) -> None:
    assert _titles(client.get("/api/books", query_string={"search": "_"})) == []
    assert _titles(client.get("/api/books", query_string={"search": "%"})) == []

    create_book(title="100% Cotton_Pages", isbn="555-0000000001")
    assert _titles(client.get("/api/books", query_string={"search": "_"})) == ["100% Cotton_Pages"]
    assert _titles(client.get("/api/books", query_string={"search": "0% c"})) == ["100% Cotton_Pages"]


def test_inverted_price_range_is_rejected(client, catalog) -> None:
    resp = client.get("/api/books?minPrice=20&maxPrice=10")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Maximum price must be greater than or equal to minimum price"}


def test_negative_price_bounds_are_rejected(client) -> None:
    assert client.get("/api/books?minPrice=-1").get_json() == {"error": "Minimum price cannot be negative"}
    assert client.get("/api/books?maxPrice=-1").status_code == 400


# ---------- single book ----------

def test_get_book_populates_creator(client, admin, create_book) -> None:
    book_id = create_book()
    resp = client.get(f"/api/books/{book_id}")
    assert resp.status_code == 200
    assert resp.get_json()["createdBy"] == {"id": admin.id, "username": admin.username, "email": admin.email}


def test_get_book_bad_id_and_missing(client) -> None:
    assert client.get("/api/books/not-an-id").status_code == 400
    resp = client.get("/api/books/999")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Book not found"}


# ---------- update ----------

def test_update_is_partial(client, app, admin, create_book) -> None:
    book_id = create_book()
    resp = client.put(
        f"/api/books/{book_id}",
        json={"title": "The Hobbit (Illustrated)", "author": "", "quantity": 0},
        headers=admin.headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Book updated successfully"
    assert body["book"]["title"] == "The Hobbit (Illustrated)"
    assert body["book"]["author"] == "J.R.R. Tolkien"
    assert body["book"]["quantity"] == 0
    assert body["book"]["price"] == pytest.approx(12.5)


def test_update_with_negative_price_changes_nothing(client, app, admin, create_book) -> None:
    book_id = create_book()
    resp = client.put(
        f"/api/books/{book_id}", json={"title": "Changed", "price": -5}, headers=admin.headers
    )
    assert resp.status_code == 400
    with app.app_context():
        book = db.session.get(Book, book_id)
        assert book.price == pytest.approx(12.5)
        assert book.title == "The Hobbit"


def test_update_rejects_isbn_of_another_book(client, admin, create_book) -> None:
    create_book()
    other = create_book(isbn="111-1111111111")
    resp = client.put(f"/api/books/{other}", json={"isbn": "978-0547928227"}, headers=admin.headers)
    assert resp.status_code == 400


def test_update_missing_and_bad_id(client, admin) -> None:
    assert client.put("/api/books/404", json={"title": "x"}, headers=admin.headers).status_code == 404
    assert client.put("/api/books/abc", json={"title": "x"}, headers=admin.headers).status_code == 400


def test_update_requires_admin(client, manager, create_book) -> None:
    book_id = create_book()
    assert client.put(f"/api/books/{book_id}", json={"title": "x"}, headers=manager.headers).status_code == 403


# ---------- delete ----------

def test_delete_book(client, app, admin, create_book) -> None:
    book_id = create_book()
    resp = client.delete(f"/api/books/{book_id}", headers=admin.headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Book deleted successfully"}
    assert _count(app) == 0
    assert client.delete(f"/api/books/{book_id}", headers=admin.headers).status_code == 404


def test_delete_requires_admin(client, reader, create_book) -> None:
    book_id = create_book()
    assert client.delete(f"/api/books/{book_id}", headers=reader.headers).status_code == 403


def test_update_rejects_oversized_quantity(client, app, admin, create_book) -> None:
    book_id = create_book()
    resp = client.put(f"/api/books/{book_id}", json={"quantity": 2**63}, headers=admin.headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Quantity must be a non-negative integer"}
    with app.app_context():
        assert db.session.get(Book, book_id).quantity == 3


def test_largest_quantity_is_stored(client, admin, book_data) -> None:
    resp = client.post("/api/books", json=book_data(quantity=2**63 - 1), headers=admin.headers)
    assert resp.status_code == 201
    assert resp.get_json()["book"]["quantity"] == 2**63 - 1
