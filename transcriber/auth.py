"""
Bearer token authentication
"""
import hmac
import json
from functools import wraps
from typing import Dict, Optional

from flask import current_app, g, jsonify, request

from .errors import AuthError

DEFAULT_IDENTITY = "default"


def parse_token_string(raw: str) -> Dict[str, str]:
    """Parse ``token:identity`` pairs separated by commas.

    A bare token with no identity maps to ``default``.
    """
    tokens: Dict[str, str] = {}
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        token, _, identity = part.partition(":")
        token = token.strip()
        if token:
            tokens[token] = identity.strip() or DEFAULT_IDENTITY
    return tokens


def load_token_file(path: str) -> Dict[str, str]:
    """Load a JSON object mapping token to identity"""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Token file {path} must contain a JSON object")
    return {str(k): str(v) for k, v in data.items() if k}


def load_tokens(config) -> Dict[str, str]:
    tokens = parse_token_string(config.get("API_TOKENS", ""))
    path = (config.get("API_TOKENS_FILE") or "").strip()
    if path:
        tokens.update(load_token_file(path))
    return tokens


def init_auth(app):
    """Initialize authentication"""
    tokens = load_tokens(app.config)
    app.extensions["api_tokens"] = tokens
    if not tokens:
        app.logger.warning("No API tokens configured; every request will be rejected")
    else:
        app.logger.info(f"Loaded {len(tokens)} API token(s)")


def authenticate(auth_header: Optional[str], tokens: Dict[str, str]) -> str:
    """Return the identity for an Authorization header or raise AuthError"""
    if not auth_header:
        raise AuthError("No authorization header")

    parts = auth_header.split()
    if len(parts) != 2:
        raise AuthError("Invalid authorization format")
    auth_type, token = parts

    if auth_type.lower() != "bearer":
        raise AuthError("Invalid authorization type")

    for known, identity in tokens.items():
        if hmac.compare_digest(known.encode("utf-8"), token.encode("utf-8")):
            return identity
    raise AuthError("Invalid token")


def token_required(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        tokens = current_app.extensions.get("api_tokens", {})
        try:
            g.identity = authenticate(request.headers.get("Authorization"), tokens)
        except AuthError as e:
            current_app.logger.info(f"Rejected request to {request.path}: {e}")
            return jsonify({"error": str(e)}), 401
        return f(*args, **kwargs)
    return decorated_function
