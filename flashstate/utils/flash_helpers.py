"""Flash helpers for HTMX-aware messaging.

Handler code reaches the request's FlashStore through ``get_flash()``. The
``flash`` helper writes a message for the next page load, except for HTMX
requests: their partial responses render the message inline, so it is written
to ``flash.now`` instead and does not reappear on the next full page.
"""
from flask import current_app, request

from flashstate.services.flash_lifecycle import EXTENSION_NAME, FlashLifecycle
from flashstate.services.flash_store import FlashStore


def is_htmx_request() -> bool:
    return bool(request.headers.get('HX-Request'))


def get_flash() -> FlashStore:
    """Return the current request's flash, loading it if no hook has yet"""
    lifecycle = current_app.extensions.get(EXTENSION_NAME) or FlashLifecycle()
    return lifecycle.load()


def flash(message, category=None):
    """Flash a message for the next request.

    Args:
        message: The message to flash
        category: Flash key ('notice', 'alert', 'warning', ...); defaults to
            ``FLASH_DEFAULT_CATEGORY``

    Usage:
        from flashstate.utils.flash_helpers import flash
        flash("Post created")
        flash("Could not save", 'alert')
    """
    category = category or current_app.config.get('FLASH_DEFAULT_CATEGORY', 'notice')
    if is_htmx_request() and current_app.config.get('FLASH_HTMX_NOW', True):
        flash_now(message, category)
    else:
        get_flash()[category] = message


def flash_now(message, category=None):
    """Flash a message for the current request only"""
    category = category or current_app.config.get('FLASH_DEFAULT_CATEGORY', 'notice')
    get_flash().now[category] = message
