"""Blog posts. Managers and admins publish; there is no edit or delete."""

import logging

from errors import NotFoundError, ValidationError
from extensions import db
from models import TimestampMixin, isoformat, user_summary
from utils import clean_str, parse_id

logger = logging.getLogger(__name__)


class BlogPost(TimestampMixin, db.Model):
    __tablename__ = "blog_posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    author = db.Column(db.String(150), nullable=False)
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    comments_disabled = db.Column(db.Boolean, default=False, nullable=False)

    created_by = db.relationship("User")
    comments = db.relationship(
        "Comment",
        primaryjoin="and_(Comment.content_type == 'BlogPost', foreign(Comment.content_id) == BlogPost.id)",
        order_by="Comment.created_at",
        viewonly=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "createdBy": user_summary(self.created_by, "username", "role"),
            "comments": [c.id for c in self.comments],
            "commentsDisabled": self.comments_disabled,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


def list_posts() -> list[BlogPost]:
    return BlogPost.query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()


def get_post(post_id) -> BlogPost:
    post = db.session.get(BlogPost, parse_id(post_id, "post ID"))
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(payload: dict, actor) -> BlogPost:
    title = clean_str(payload.get("title"))
    content = clean_str(payload.get("content"))
    if not title or not content:
        raise ValidationError("Title and content are required")

    post = BlogPost(title=title, content=content, author=actor.display_name, created_by_id=actor.id)
    db.session.add(post)
    db.session.commit()
    logger.info("Blog post %s created by user %s", post.id, actor.id)
    return post
