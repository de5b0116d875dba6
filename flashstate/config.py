"""Flask configuration settings with security"""
import os


class Config:
    """Base configuration class"""
    DEBUG = False

    # Core Flask settings
    SECRET_KEY = os.environ.get('FLASK_SECRET_KEY_FLASHSTATE') or 'dev-secret-key-change-in-production'

    # Flash settings
    FLASH_SESSION_KEY = os.environ.get('FLASHSTATE_SESSION_KEY', 'flash')
    FLASH_DEFAULT_CATEGORY = os.environ.get('FLASHSTATE_DEFAULT_CATEGORY', 'notice')
    # HTMX partial requests get now-scoped messages instead of next-request ones
    FLASH_HTMX_NOW = os.environ.get('FLASHSTATE_HTMX_NOW', 'true').lower() == 'true'

    # CORS settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS_FLASHSTATE', 'http://localhost:3000,http://127.0.0.1:3000').split(',')

    # CSP mode
    CSP_MODE = os.environ.get('CSP_MODE', 'development')


class SecurityConfig:
    """Security-specific configuration"""

    @staticmethod
    def get_cors_config(app_config=None):
        """Get CORS configuration based on app config"""
        origins = app_config.get('CORS_ORIGINS') if app_config else Config.CORS_ORIGINS

        return {
            'origins': origins,
            'methods': ['GET', 'POST', 'OPTIONS'],
            'allow_headers': ['Content-Type', 'X-CSRFToken', 'HX-Request'],
            'supports_credentials': True  # Session cookie carries the flash
        }

    @staticmethod
    def get_talisman_config(app_config=None):
        """Get Talisman (security headers) configuration"""
        csp_mode = app_config.get('CSP_MODE', 'development') if app_config else Config.CSP_MODE

        if csp_mode == 'development':
            csp = {
                'default-src': "'self' 'unsafe-inline'",
                'script-src': "'self' 'unsafe-inline' https://unpkg.com https://cdn.tailwindcss.com",
                'style-src': "'self' 'unsafe-inline' https://cdn.tailwindcss.com",
            }
        else:
            csp = {
                'default-src': "'self'",
                'script-src': "'self' https://unpkg.com",
                'style-src': "'self' 'unsafe-inline' https://cdn.tailwindcss.com",
            }

        return {
            'force_https': app_config.get('TALISMAN_FORCE_HTTPS', False) if app_config else False,
            'content_security_policy': csp,
            'session_cookie_secure': app_config.get('SESSION_COOKIE_SECURE', False) if app_config else False,
        }


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TEMPLATES_AUTO_RELOAD = True

    SECURITY_HEADERS_ENABLED = os.environ.get('SECURITY_HEADERS_ENABLED_FLASHSTATE', 'false').lower() == 'true'
    DISABLE_SECURITY = os.environ.get('DISABLE_SECURITY_FLASHSTATE', 'true').lower() == 'true'
    CSP_MODE = 'development'
    DEVELOPMENT_MODE = True


class TestingConfig(Config):
    """Test configuration: no CSRF, no security middleware"""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    WTF_CSRF_ENABLED = False
    DISABLE_SECURITY = True
    DEVELOPMENT_MODE = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    SECURITY_HEADERS_ENABLED = True
    DISABLE_SECURITY = False
    DEVELOPMENT_MODE = False

    CSP_MODE = os.environ.get('CSP_MODE', 'strict')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS_FLASHSTATE', 'https://yourdomain.com').split(',')

    TALISMAN_FORCE_HTTPS = True
    SESSION_COOKIE_SECURE = True
