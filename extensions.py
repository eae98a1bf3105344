from flask import request
from flask_cors import CORS
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy

# Extensions are created unbound and attached in create_app()

# Database
db = SQLAlchemy()


class BearerLoginManager(LoginManager):
    """LoginManager that only consults the request loader.

    Session and remember-me cookies are never read, so a stray
    ``remember_token`` cookie cannot shadow the Authorization header.
    """

    def _load_user(self):
        user = self._load_user_from_request(request)
        return self._update_request_context_with_user(user)


# Bearer-token authentication (users are resolved per request, no sessions)
login_manager = BearerLoginManager()

# Cross-origin access for the frontend
cors = CORS()
