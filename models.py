"""Shared SQLAlchemy models."""

from datetime import datetime, timezone

from flask_login import UserMixin

from extensions import db

ROLES = ("user", "manager", "admin")
MODERATOR_ROLES = ("manager", "admin")


def utcnow() -> datetime:
    """Naive UTC timestamp for the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)


def isoformat(value):
    return value.isoformat() if value is not None else None


class User(UserMixin, TimestampMixin, db.Model):
    """Represents a registered account. Email is stored trimmed and lowercased."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), nullable=False, default="user")  # user, manager, admin

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATOR_ROLES

    @property
    def display_name(self) -> str:
        return self.username or self.email

    def public_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email, "role": self.role}

    def to_dict(self) -> dict:
        """Full record for the admin listing, password hash included."""
        data = self.public_dict()
        data.update(
            password=self.password,
            createdAt=isoformat(self.created_at),
            updatedAt=isoformat(self.updated_at),
        )
        return data

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.email}>"


def user_summary(user: User | None, *fields: str) -> dict | None:
    """Populated reference to a user, limited to ``fields`` plus the id."""
    if user is None:
        return None
    data = {"id": user.id}
    for field in fields:
        data[field] = getattr(user, field)
    return data
