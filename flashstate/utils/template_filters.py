"""Custom Jinja filters and context for rendering the flash"""

from flask import has_request_context

from flashstate.utils.flash_helpers import get_flash

FLASH_CATEGORY_CLASSES = {
    'notice': 'bg-green-100 text-green-800',
    'success': 'bg-green-100 text-green-800',
    'info': 'bg-blue-100 text-blue-800',
    'warning': 'bg-yellow-100 text-yellow-800',
    'warn': 'bg-yellow-100 text-yellow-800',
    'alert': 'bg-red-100 text-red-800',
    'error': 'bg-red-100 text-red-800',
}


def register_filters(app):
    """Register custom template filters"""

    @app.template_filter('flash_class')
    def flash_class(category):
        """Get CSS class for a flash message box"""
        return FLASH_CATEGORY_CLASSES.get(category, 'bg-gray-100 text-gray-800')

    @app.template_filter('flash_text')
    def flash_text(value):
        """Render a flash value; lists are joined, None becomes empty"""
        if isinstance(value, (list, tuple)):
            return ', '.join(str(item) for item in value)
        return str(value) if value is not None else ''

    # Templates read the flash as `flash`, e.g. {% if flash.notice %}
    @app.context_processor
    def inject_flash():
        if not has_request_context():
            return {}
        return {'flash': get_flash()}
