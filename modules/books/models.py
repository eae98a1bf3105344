"""
Book catalog: table, filters and admin CRUD operations.

Filtering is a direct translation of query parameters into SQL predicates:
exact category/condition, an inclusive price range and a case-insensitive
substring search OR-ed across title, author and isbn. Results are always
newest first; there is no pagination.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from errors import ConflictError, NotFoundError, ValidationError
from extensions import db
from models import TimestampMixin, isoformat, user_summary
from utils import clean_str, parse_date, parse_id, parse_int, parse_number

logger = logging.getLogger(__name__)

CATEGORIES = [
    "Fiction", "Mystery", "Romance", "Science Fiction", "Fantasy", "History",
    "Biography", "Self-Help", "Poetry", "Children", "Young Adult", "Non-Fiction",
    "Classics", "Literary Fiction", "Horror", "Adventure", "Other",
]
CONDITIONS = ["Like New", "Good", "Fair", "Poor"]

REQUIRED_FIELDS = (
    "title", "author", "isbn", "publicationDate", "description",
    "category", "condition", "price", "quantity",
)

PRICE_ERROR = "Price must be a non-negative number"
QUANTITY_ERROR = "Quantity must be a non-negative integer"
DUPLICATE_ISBN = "Book with this ISBN already exists"

# quantity has to fit a signed 64-bit INTEGER column
MAX_QUANTITY = 2**63 - 1


class Book(TimestampMixin, db.Model):
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    author = db.Column(db.String(255), nullable=False)
    isbn = db.Column(db.String(32), unique=True, nullable=False)
    publication_date = db.Column(db.Date, nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(50), nullable=False)
    condition = db.Column(db.String(20), nullable=False)
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    cover_image = db.Column(db.String(512))
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    reviews_disabled = db.Column(db.Boolean, default=False, nullable=False)

    created_by = db.relationship("User")

    def to_dict(self, populate: bool = False) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publicationDate": isoformat(self.publication_date),
            "description": self.description,
            "category": self.category,
            "condition": self.condition,
            "price": self.price,
            "quantity": self.quantity,
            "coverImage": self.cover_image,
            "createdBy": (
                user_summary(self.created_by, "username", "email") if populate else self.created_by_id
            ),
            "reviewsDisabled": self.reviews_disabled,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Book {self.isbn}: {self.title}>"


# ---------- Validation helpers ----------

def _price(value) -> float:
    price = parse_number(value)
    if price is None or price < 0:
        raise ValidationError(PRICE_ERROR)
    return price


def _quantity(value) -> int:
    quantity = parse_int(value)
    if quantity is None or not 0 <= quantity <= MAX_QUANTITY:
        raise ValidationError(QUANTITY_ERROR)
    return quantity


def _choice(value, allowed: list[str], label: str) -> str:
    if value not in allowed:
        raise ValidationError(f"{label} must be one of: {', '.join(allowed)}")
    return value


def _price_bound(raw, label: str):
    """Parsed min/max price filter; unparsable values are ignored."""
    if raw is None or str(raw).strip() == "":
        return None
    bound = parse_number(raw)
    if bound is not None and bound < 0:
        raise ValidationError(f"{label} price cannot be negative")
    return bound


def _isbn_taken(isbn: str, exclude_id: int | None = None) -> bool:
    query = Book.query.filter(Book.isbn == isbn)
    if exclude_id is not None:
        query = query.filter(Book.id != exclude_id)
    return db.session.query(query.exists()).scalar()


def _commit_book():
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(DUPLICATE_ISBN, status_code=400) from None


# ---------- Domain operations ----------

def list_books(category=None, min_price=None, max_price=None, condition=None, search=None) -> list[Book]:
    query = Book.query

    if category:
        query = query.filter(Book.category == category)

    low = _price_bound(min_price, "Minimum")
    high = _price_bound(max_price, "Maximum")
    if low is not None and high is not None and low > high:
        raise ValidationError("Maximum price must be greater than or equal to minimum price")
    if low is not None:
        query = query.filter(Book.price >= low)
    if high is not None:
        query = query.filter(Book.price <= high)

    if condition:
        query = query.filter(Book.condition == condition)

    if search:
        # literal substring: % and _ in the search text are escaped
        query = query.filter(or_(
            Book.title.icontains(search, autoescape=True),
            Book.author.icontains(search, autoescape=True),
            Book.isbn.icontains(search, autoescape=True),
        ))

    return query.order_by(Book.created_at.desc(), Book.id.desc()).all()


def get_book(book_id) -> Book:
    book = db.session.get(Book, parse_id(book_id, "book ID"))
    if book is None:
        raise NotFoundError("Book not found")
    return book


def create_book(payload: dict, actor) -> Book:
    missing = [f for f in REQUIRED_FIELDS if payload.get(f) is None or payload.get(f) == ""]
    if missing:
        raise ValidationError("All required fields must be provided")

    price = _price(payload["price"])
    quantity = _quantity(payload["quantity"])
    isbn = clean_str(payload["isbn"])
    if isbn is None:
        raise ValidationError("All required fields must be provided")

    book = Book(
        title=clean_str(payload["title"]),
        author=clean_str(payload["author"]),
        isbn=isbn,
        publication_date=parse_date(payload["publicationDate"]),
        description=clean_str(payload["description"]),
        category=_choice(payload["category"], CATEGORIES, "Category"),
        condition=_choice(payload["condition"], CONDITIONS, "Condition"),
        price=price,
        quantity=quantity,
        cover_image=clean_str(payload.get("coverImage")),
        created_by_id=actor.id,
    )
    if None in (book.title, book.author, book.description):
        raise ValidationError("All required fields must be provided")

    if _isbn_taken(isbn):
        raise ConflictError(DUPLICATE_ISBN, status_code=400)

    db.session.add(book)
    _commit_book()
    logger.info("Book %s (%s) created by user %s", book.id, book.isbn, actor.id)
    return book


def update_book(book_id, payload: dict) -> Book:
    """
    Partial update. Text fields are applied only when truthy, price and
    quantity whenever present. Every provided value is validated before the
    record is touched, so a rejected update changes nothing.
    """
    book = get_book(book_id)

    changes = {}
    for field, column in (("title", "title"), ("author", "author"),
                          ("isbn", "isbn"), ("description", "description")):
        value = clean_str(payload.get(field))
        if value:
            changes[column] = value
    if payload.get("publicationDate"):
        changes["publication_date"] = parse_date(payload["publicationDate"])
    if payload.get("category"):
        changes["category"] = _choice(payload["category"], CATEGORIES, "Category")
    if payload.get("condition"):
        changes["condition"] = _choice(payload["condition"], CONDITIONS, "Condition")
    if payload.get("price") is not None:
        changes["price"] = _price(payload["price"])
    if payload.get("quantity") is not None:
        changes["quantity"] = _quantity(payload["quantity"])
    if payload.get("coverImage"):
        changes["cover_image"] = clean_str(payload["coverImage"])

    if "isbn" in changes and _isbn_taken(changes["isbn"], exclude_id=book.id):
        raise ConflictError(DUPLICATE_ISBN, status_code=400)

    for column, value in changes.items():
        setattr(book, column, value)
    _commit_book()
    logger.info("Book %s updated (%s)", book.id, ", ".join(sorted(changes)) or "no changes")
    return book


def delete_book(book_id) -> None:
    """Remove the book. Its reviews are left in place."""
    book = get_book(book_id)
    ident = book.id
    db.session.delete(book)
    db.session.commit()
    logger.info("Book %s deleted", ident)

