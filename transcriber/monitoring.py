"""
Error reporting (Sentry) and usage analytics (Umami)
"""
from typing import Any, Dict, Optional

import requests
import sentry_sdk
from flask import current_app, request
from sentry_sdk.integrations.flask import FlaskIntegration

UMAMI_TIMEOUT = 5


def init_sentry(app) -> bool:
    dsn = (app.config.get("SENTRY_DSN") or "").strip()
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration()],
        environment=app.config.get("ENV_NAME"),
        release=app.config.get("APP_VERSION"),
    )
    app.logger.info("Sentry error reporting enabled")
    return True


def track_event(event: str, data: Optional[Dict[str, Any]] = None) -> bool:
    """Send an event to Umami. Failures are logged, never raised."""
    website_id = (current_app.config.get("UMAMI_WEBSITE_ID") or "").strip()
    if not website_id:
        return False

    host = (current_app.config.get("UMAMI_HOST_URL") or "").rstrip("/")
    payload = {
        "type": "event",
        "payload": {
            "website": website_id,
            "name": event,
            "url": request.path,
            "hostname": request.host,
            "data": data or {},
        },
    }
    headers = {"User-Agent": request.headers.get("User-Agent") or "transcriber"}
    try:
        r = requests.post(f"{host}/api/send", json=payload, headers=headers, timeout=UMAMI_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        current_app.logger.error(f"Error tracking event: {e}")
        return False
    return True
