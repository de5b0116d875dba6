"""Main Flask application with the flash lifecycle installed"""

import os
import logging
from flask import Flask
from flask_wtf.csrf import CSRFProtect

from flashstate.services.flash_lifecycle import FlashLifecycle
from flashstate.utils.template_filters import register_filters
from flashstate.routes import notices
from flashstate.config import SecurityConfig

# Initialize logger
logger = logging.getLogger(__name__)


def _init_security_middleware(app):
    """Initialize CORS and security headers unless disabled by configuration"""
    if app.config.get('DISABLE_SECURITY', False):
        logger.info("Security middleware disabled via configuration")
        return

    try:
        from flask_cors import CORS
        cors_config = SecurityConfig.get_cors_config(app.config)
        CORS(app, **cors_config)
        logger.info(f"CORS initialized with origins: {cors_config['origins']}")
    except ImportError:
        logger.warning("flask-cors not available, CORS middleware not initialized")
    except Exception as e:
        logger.error(f"Failed to initialize CORS: {e}")

    if app.config.get('SECURITY_HEADERS_ENABLED', True):
        try:
            from flask_talisman import Talisman
            talisman_config = SecurityConfig.get_talisman_config(app.config)
            Talisman(app, **talisman_config)
            logger.info(f"Security headers initialized with CSP mode: {app.config.get('CSP_MODE', 'development')}")
        except ImportError:
            logger.warning("flask-talisman not available, security headers not initialized")
        except Exception as e:
            logger.error(f"Failed to initialize security headers: {e}")


def create_app(config_class=None):
    """Application factory"""

    basedir = os.path.abspath(os.path.dirname(__file__))
    template_dir = os.path.join(basedir, 'templates')

    app = Flask(__name__, template_folder=template_dir)

    if config_class:
        app.config.from_object(config_class)
    else:
        app.config.from_object('flashstate.config.Config')

    _init_security_middleware(app)

    CSRFProtect(app)

    # Load the flash before handlers run, sweep it before the session is saved
    FlashLifecycle(app)

    register_filters(app)

    app.register_blueprint(notices.bp)

    return app
