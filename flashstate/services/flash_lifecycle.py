"""Request lifecycle hooks that load, sweep and persist the flash.

    app = Flask(__name__)
    FlashLifecycle(app)

The store is attached to ``flask.g`` before each request and swept after it,
just before Flask saves the session. With no session available (no
``SECRET_KEY``) the store lives for one request only, so only ``flash.now``
is useful there.
"""
import copy
import logging

from flask import Flask, current_app, g, request, session

from flashstate.services.flash_store import FlashStore

logger = logging.getLogger(__name__)

EXTENSION_NAME = 'flash_state'


class FlashLifecycle:
    """Flask extension wiring FlashStore into the request cycle"""

    def __init__(self, app: Flask = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        app.config.setdefault('FLASH_SESSION_KEY', 'flash')
        app.before_request(self._before_request)
        app.after_request(self.persist)
        app.extensions[EXTENSION_NAME] = self
        logger.info(f"Flash lifecycle registered under session key '{app.config['FLASH_SESSION_KEY']}'")

    @staticmethod
    def session_available() -> bool:
        return not current_app.session_interface.is_null_session(session)

    @staticmethod
    def serves_handler() -> bool:
        """False for static files and unrouted requests such as 404s"""
        endpoint = request.endpoint
        return endpoint is not None and endpoint.rsplit('.', 1)[-1] != 'static'

    def _before_request(self):
        # A non-None return value would short-circuit the request
        if self.serves_handler():
            self.load()

    def load(self) -> FlashStore:
        """Attach the request's FlashStore to ``g``, loading it at most once"""
        store = g.get('flash')
        if store is not None:
            return store

        if self.session_available():
            persisted = session.get(current_app.config.get('FLASH_SESSION_KEY', 'flash'))
            store = FlashStore.from_session(persisted)
            g.flash_persisted = copy.deepcopy(persisted)
            g.flash_persistent = True
        else:
            store = FlashStore()
            g.flash_persisted = None
            g.flash_persistent = False

        g.flash = store
        return store

    def persist(self, response):
        """Sweep the flash and write it back to the session"""
        store = g.pop('flash', None)
        if store is None:
            return response

        store.sweep()

        if not g.pop('flash_persistent', False):
            return response

        key = current_app.config.get('FLASH_SESSION_KEY', 'flash')
        data = store.to_session()
        if data == (g.pop('flash_persisted', None) or []):
            return response

        if data:
            session[key] = data
        else:
            session.pop(key, None)
        logger.debug(f"Persisted flash with {len(data)} entries")
        return response
