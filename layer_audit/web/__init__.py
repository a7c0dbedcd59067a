"""JSON API over an audit result (optional ``web`` extra)."""

from layer_audit.web.app import create_app

__all__ = ["create_app"]
