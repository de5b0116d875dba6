"""Shared test fixtures for flashstate tests

"""
import unittest

from flashstate.config import TestingConfig
from flashstate.main import create_app
from flashstate.services.flash_store import FlashStore


def next_cycle(store):
    """End the request the store belongs to and load the next one's flash"""
    store.sweep()
    return FlashStore.from_session(store.to_session())


class BaseRouteTestCase(unittest.TestCase):
    """Base test case for route testing with shared setup"""

    def setUp(self):
        """Set up app and a cookie-keeping test client"""
        self.app = create_app(TestingConfig)
        self.client = self.app.test_client()

    def get_flash_json(self):
        """Flash as seen by a fresh request; this request consumes a cycle too"""
        response = self.client.get('/flash.json')
        self.assertEqual(response.status_code, 200)
        return response.get_json()

    def persisted_flash(self):
        """Raw flash value stored in the session cookie"""
        with self.client.session_transaction() as sess:
            return sess.get(self.app.config['FLASH_SESSION_KEY'])

    def post_notice(self, message, category=None, headers=None):
        data = {'message': message}
        if category:
            data['category'] = category
        return self.client.post('/notices', data=data, headers=headers or {})
