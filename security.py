"""
Response hardening shared by every blueprint.

- security headers on all responses (HSTS, CSP, framing, sniffing, referrer)
- no-store caching for auth and user listings
- optional redirect of plain HTTP to HTTPS (USE_HTTPS)
"""

from flask import redirect, request

CONTENT_SECURITY_POLICY = (
    "default-src 'none'; "
    "script-src 'self'; "
    "style-src 'self'; "
    "img-src 'self' data: https:; "
    "font-src 'self'; "
    "connect-src 'self'; "
    "manifest-src 'self'; "
    "media-src 'none'; "
    "object-src 'none'; "
    "frame-src 'none'; "
    "worker-src 'self'; "
    "frame-ancestors 'none'; "
    "base-uri 'self'; "
    "form-action 'self'; "
    "upgrade-insecure-requests"
)

SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=(), "
        "magnetometer=(), gyroscope=(), accelerometer=()"
    ),
}

SENSITIVE_PREFIXES = ("/api/auth", "/api/users")

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _is_secure() -> bool:
    return request.is_secure or request.headers.get("X-Forwarded-Proto") == "https"


def init_security(app) -> None:
    @app.before_request
    def require_https():
        if app.config.get("USE_HTTPS") and not _is_secure():
            return redirect(request.url.replace("http://", "https://", 1), code=301)
        return None

    @app.after_request
    def apply_headers(response):
        response.headers.pop("Server", None)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        if request.path.startswith(SENSITIVE_PREFIXES):
            for name, value in NO_STORE_HEADERS.items():
                response.headers[name] = value
        return response
