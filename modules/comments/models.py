# -*- coding: utf-8 -*-
"""
Comments on articles and blog posts.

A comment points at its target through a (content_type, content_id) pair.
``ContentType`` is the closed set of targets and ``CONTENT_MODELS`` maps
every member to the table that holds it, so a discriminator outside the enum
is rejected before any query runs.

Moderation:
- the author, a manager or an admin may delete a comment;
- managers/admins attach a warning (text + who added it) without deleting;
- managers/admins flip ``comments_disabled`` on the target, which blocks new
  comments while keeping the existing ones.

The target's comment list is a view over this table, so creating or deleting
a comment is a single commit.
"""

import enum
import logging

from errors import ForbiddenError, NotFoundError, ValidationError
from extensions import db
from models import TimestampMixin, isoformat, user_summary
from modules.articles.models import Article
from modules.blog.models import BlogPost
from permissions import can_remove
from utils import clean_str, parse_id

logger = logging.getLogger(__name__)


class ContentType(str, enum.Enum):
    ARTICLE = "Article"
    BLOG_POST = "BlogPost"

    @classmethod
    def parse(cls, value) -> "ContentType":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid content type") from None


CONTENT_MODELS = {
    ContentType.ARTICLE: Article,
    ContentType.BLOG_POST: BlogPost,
}


def resolve_target(content_type: ContentType, content_id: int):
    """The article or blog post a comment points at."""
    target = db.session.get(CONTENT_MODELS[content_type], content_id)
    if target is None:
        raise NotFoundError(f"{content_type.value} not found")
    return target


class Comment(TimestampMixin, db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    content_type = db.Column(db.String(20), nullable=False)
    content_id = db.Column(db.Integer, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    author = db.Column(db.String(255), nullable=False)  # display name at posting time
    content = db.Column(db.Text, nullable=False)
    warning = db.Column(db.Text)
    warning_added_by_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    user = db.relationship("User", foreign_keys=[user_id])
    warning_added_by = db.relationship("User", foreign_keys=[warning_added_by_id])

    __table_args__ = (
        db.Index("ix_comments_target", "content_type", "content_id"),
    )

    def to_dict(self, populate: bool = False) -> dict:
        return {
            "id": self.id,
            "contentType": self.content_type,
            "contentId": self.content_id,
            "user": user_summary(self.user, "username", "email") if populate else self.user_id,
            "author": self.author,
            "content": self.content,
            "warning": self.warning,
            "warningAddedBy": self.warning_added_by_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


def _newest_first(query):
    return query.order_by(Comment.created_at.desc(), Comment.id.desc())


def get_comment(comment_id) -> Comment:
    comment = db.session.get(Comment, parse_id(comment_id, "comment ID"))
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


# ---------- Domain operations ----------

def list_comments(content_type, content_id) -> list[Comment]:
    kind = ContentType.parse(content_type)
    ident = parse_id(content_id, "content ID")
    return _newest_first(Comment.query.filter_by(content_type=kind.value, content_id=ident)).all()


def list_comments_by_post(post_id) -> list[Comment]:
    """Older clients address comments by target id alone, whatever its type."""
    ident = parse_id(post_id, "post ID")
    return _newest_first(Comment.query.filter_by(content_id=ident)).all()


def list_all_comments() -> list[Comment]:
    return _newest_first(Comment.query).all()


def create_comment(content_type, content_id, content, actor) -> Comment:
    kind = ContentType.parse(content_type)
    text = clean_str(content)
    if not text or content_id in (None, ""):
        raise ValidationError("Content and contentId are required")

    target = resolve_target(kind, parse_id(content_id, "content ID"))
    if target.comments_disabled:
        raise ForbiddenError("Comments are disabled for this content")

    comment = Comment(
        content_type=kind.value,
        content_id=target.id,
        user_id=actor.id,
        author=actor.display_name,
        content=text,
    )
    db.session.add(comment)
    db.session.commit()
    logger.info("Comment %s added to %s %s by user %s", comment.id, kind.value, target.id, actor.id)
    return comment


def delete_comment(comment_id, actor) -> None:
    comment = get_comment(comment_id)
    if not can_remove(actor, comment.user_id):
        logger.warning("User %s may not delete comment %s", actor.id, comment.id)
        raise ForbiddenError("Not authorized to delete this comment")

    ident = comment.id
    db.session.delete(comment)
    db.session.commit()
    logger.info("Comment %s deleted by user %s", ident, actor.id)


def add_comment_warning(comment_id, warning, actor) -> Comment:
    text = clean_str(warning)
    if not text:
        raise ValidationError("Warning message is required")

    comment = get_comment(comment_id)
    comment.warning = text
    comment.warning_added_by_id = actor.id
    db.session.commit()
    logger.info("Warning added to comment %s by user %s", comment.id, actor.id)
    return comment


def toggle_comments_disabled(content_type, content_id):
    """Flip the target's comments_disabled flag and return the target."""
    kind = ContentType.parse(content_type)
    target = resolve_target(kind, parse_id(content_id, "content ID"))
    target.comments_disabled = not target.comments_disabled
    db.session.commit()
    logger.info(
        "Comments %s for %s %s",
        "disabled" if target.comments_disabled else "enabled", kind.value, target.id,
    )
    return target
