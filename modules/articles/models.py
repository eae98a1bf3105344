"""Articles written by managers and admins."""

import logging

from errors import NotFoundError, ValidationError
from extensions import db
from models import TimestampMixin, isoformat, user_summary
from utils import clean_str, parse_id

logger = logging.getLogger(__name__)

CATEGORIES = ["Tips", "How-To", "News", "Reviews", "Industry Insights", "Other"]
DEFAULT_CATEGORY = "Other"


class Article(TimestampMixin, db.Model):
    __tablename__ = "articles"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    author = db.Column(db.String(150), nullable=False)
    category = db.Column(db.String(50), nullable=False, default=DEFAULT_CATEGORY)
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    comments_disabled = db.Column(db.Boolean, default=False, nullable=False)

    created_by = db.relationship("User")
    # derived from the comment rows, so creating/deleting a comment is one write
    comments = db.relationship(
        "Comment",
        primaryjoin="and_(Comment.content_type == 'Article', foreign(Comment.content_id) == Article.id)",
        order_by="Comment.created_at",
        viewonly=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "category": self.category,
            "createdBy": user_summary(self.created_by, "username", "role"),
            "comments": [c.id for c in self.comments],
            "commentsDisabled": self.comments_disabled,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


def _category(value) -> str:
    if value not in CATEGORIES:
        raise ValidationError(f"Category must be one of: {', '.join(CATEGORIES)}")
    return value


# ---------- Domain operations ----------

def list_articles() -> list[Article]:
    return Article.query.order_by(Article.created_at.desc(), Article.id.desc()).all()


def get_article(article_id) -> Article:
    article = db.session.get(Article, parse_id(article_id, "article ID"))
    if article is None:
        raise NotFoundError("Article not found")
    return article


def create_article(payload: dict, actor) -> Article:
    title = clean_str(payload.get("title"))
    content = clean_str(payload.get("content"))
    if not title or not content:
        raise ValidationError("Title and content required")

    article = Article(
        title=title,
        content=content,
        category=_category(payload.get("category") or DEFAULT_CATEGORY),
        author=actor.display_name,
        created_by_id=actor.id,
    )
    db.session.add(article)
    db.session.commit()
    logger.info("Article %s created by user %s", article.id, actor.id)
    return article


def update_article(article_id, payload: dict) -> Article:
    """Admin-only partial update; empty values keep the stored ones."""
    article = get_article(article_id)

    title = clean_str(payload.get("title"))
    content = clean_str(payload.get("content"))
    category = _category(payload["category"]) if payload.get("category") else None

    article.title = title or article.title
    article.content = content or article.content
    article.category = category or article.category
    db.session.commit()
    logger.info("Article %s updated", article.id)
    return article


def delete_article(article_id) -> None:
    article = get_article(article_id)
    ident = article.id
    db.session.delete(article)
    db.session.commit()
    logger.info("Article %s deleted", ident)
