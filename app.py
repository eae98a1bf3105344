from flask import Flask
from dotenv import load_dotenv
import logging
import os

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from errors import ConfigurationError, register_error_handlers  # noqa: E402
from extensions import cors, db, login_manager  # noqa: E402  (load_dotenv needs to run first)
from security import init_security  # noqa: E402

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app: Flask) -> None:
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app.logger.setLevel(level)


def create_app(config_overrides: dict | None = None) -> Flask:
    """Application factory for the bookstore API."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    if not (app.config.get("JWT_SECRET") or "").strip():
        raise ConfigurationError("JWT_SECRET must be set to sign access tokens")

    configure_logging(app)

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Range", "X-Content-Range"],
        max_age=600,
    )

    register_error_handlers(app)
    init_security(app)

    # blueprints
    from modules.auth import bp as auth_bp
    from modules.users import bp as users_bp
    from modules.books import bp as books_bp
    from modules.reviews import bp as reviews_bp
    from modules.articles import bp as articles_bp
    from modules.blog import bp as blog_bp
    from modules.comments import bp as comments_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(books_bp)
    app.register_blueprint(reviews_bp)
    app.register_blueprint(articles_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(comments_bp)

    @app.route("/")
    def health():
        return "API running"

    # DB
    with app.app_context():
        db.create_all()

    app.logger.info("Bookstore API ready (env=%s)", app.config.get("APP_ENV"))
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config.get("APP_ENV") != "production",
    )
