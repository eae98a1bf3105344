"""
Book reviews: 1-5 star ratings with text, moderated like comments.

``book_id`` is a plain indexed column rather than a foreign key, so deleting
a book leaves its reviews behind (reachable by review id only).
"""

import logging

from errors import ForbiddenError, NotFoundError, ValidationError
from extensions import db
from models import TimestampMixin, isoformat, user_summary
from modules.books.models import get_book
from permissions import can_remove
from utils import clean_str, parse_id, parse_int

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class Review(TimestampMixin, db.Model):
    __tablename__ = "reviews"

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    author = db.Column(db.String(255), nullable=False)  # display name at posting time
    rating = db.Column(db.Integer, nullable=False)
    content = db.Column(db.Text, nullable=False)
    warning = db.Column(db.Text)
    warning_added_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    user = db.relationship("User", foreign_keys=[user_id])
    warning_added_by = db.relationship("User", foreign_keys=[warning_added_by_id])

    __table_args__ = (
        db.CheckConstraint(f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}", name="ck_reviews_rating"),
    )

    def to_dict(self, populate: bool = False) -> dict:
        return {
            "id": self.id,
            "book": self.book_id,
            "user": user_summary(self.user, "username", "email") if populate else self.user_id,
            "author": self.author,
            "rating": self.rating,
            "content": self.content,
            "warning": self.warning,
            "warningAddedBy": self.warning_added_by_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


def get_review(review_id) -> Review:
    review = db.session.get(Review, parse_id(review_id, "review ID"))
    if review is None:
        raise NotFoundError("Review not found")
    return review


def _rating(value) -> int:
    rating = parse_int(value)
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")
    return rating


# ---------- Domain operations ----------

def create_review(book_id, rating, content, actor) -> Review:
    text = clean_str(content)
    if book_id in (None, "") or rating in (None, "") or not text:
        raise ValidationError("Book ID, rating (1-5), and review content are required.")

    rating = _rating(rating)
    book = get_book(book_id)
    if book.reviews_disabled:
        raise ForbiddenError("Reviews are disabled for this book")

    review = Review(
        book_id=book.id,
        user_id=actor.id,
        author=actor.display_name,
        rating=rating,
        content=text,
    )
    db.session.add(review)
    db.session.commit()
    logger.info("Review %s (%s stars) posted on book %s by user %s", review.id, rating, book.id, actor.id)
    return review


def list_reviews(book_id) -> list[Review]:
    book = get_book(book_id)
    return (Review.query
            .filter_by(book_id=book.id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all())


def review_stats(book_id) -> dict:
    """
    Average rating, count and the list of individual ratings (oldest first).
    A book without reviews reports zeros and an empty list.
    """
    book = get_book(book_id)
    ratings = [
        rating for (rating,) in (db.session.query(Review.rating)
                                 .filter(Review.book_id == book.id)
                                 .order_by(Review.created_at.asc(), Review.id.asc()))
    ]
    if not ratings:
        return {"bookId": book.id, "averageRating": 0, "reviewCount": 0, "ratingDistribution": []}
    return {
        "bookId": book.id,
        "averageRating": sum(ratings) / len(ratings),
        "reviewCount": len(ratings),
        "ratingDistribution": ratings,
    }


def delete_review(review_id, actor) -> None:
    review = get_review(review_id)
    if not can_remove(actor, review.user_id):
        logger.warning("User %s may not delete review %s", actor.id, review.id)
        raise ForbiddenError("Not authorized to delete this review")

    ident = review.id
    db.session.delete(review)
    db.session.commit()
    logger.info("Review %s deleted by user %s", ident, actor.id)


def add_review_warning(review_id, warning, actor) -> Review:
    text = clean_str(warning)
    if not text:
        raise ValidationError("Warning message is required")

    review = get_review(review_id)
    review.warning = text
    review.warning_added_by_id = actor.id
    db.session.commit()
    logger.info("Warning added to review %s by user %s", review.id, actor.id)
    return review


def toggle_reviews_disabled(book_id):
    """Flip the book's reviews_disabled flag and return the book."""
    book = get_book(book_id)
    book.reviews_disabled = not book.reviews_disabled
    db.session.commit()
    logger.info("Reviews %s for book %s", "disabled" if book.reviews_disabled else "enabled", book.id)
    return book
