"""Notice routes: post-redirect-get with the flash"""

from datetime import datetime, timezone
from flask import Blueprint, render_template, request, current_app, redirect, url_for, jsonify

from flashstate.services.flash_lifecycle import EXTENSION_NAME
from flashstate.utils.flash_helpers import flash, flash_now, get_flash, is_htmx_request

bp = Blueprint('notices', __name__)


def _form_key():
    """Flash key named in the form, or None for the whole flash"""
    return (request.form.get('key') or '').strip() or None


@bp.route('/')
def index():
    """Page showing whatever the previous request flashed"""
    return render_template('notices.html', page_title='Notices')


@bp.route('/flash.json')
def flash_json():
    """Current flash entries, as the next handler would see them"""
    store = get_flash()
    return jsonify({
        'flash': store.to_dict(),
        'states': {key: store.state(key).value for key in store},
    })


@bp.route('/notices', methods=['POST'])
def create_notice():
    """Flash a message for the next page and redirect to it"""
    message = request.form.get('message', '').strip()
    category = request.form.get('category') or None

    if not message:
        flash_now("Message is required", 'alert')
        return render_template('notices.html', page_title='Notices'), 400

    flash(message, category)
    current_app.logger.debug(f"Flashed {category or 'default'} message")

    if is_htmx_request():
        return render_template('partials/flash_messages.html')
    return redirect(url_for('notices.index'))


@bp.route('/notices/now', methods=['POST'])
def create_now_notice():
    """Show a message on this response only"""
    message = request.form.get('message', '').strip() or 'Nothing to report'
    flash_now(message, request.form.get('category') or None)
    return render_template('notices.html', page_title='Notices')


@bp.route('/notices/keep', methods=['POST'])
def keep_notices():
    """Carry one key, or the whole flash, over one more request"""
    get_flash().keep(_form_key())
    return redirect(url_for('notices.index'))


@bp.route('/notices/discard', methods=['POST'])
def discard_notices():
    """Drop one key, or the whole flash, at the end of this request"""
    get_flash().discard(_form_key())
    return redirect(url_for('notices.index'))


@bp.route('/health')
def health_check():
    """Health check endpoint for monitoring"""
    lifecycle = current_app.extensions.get(EXTENSION_NAME)
    status = {
        'status': 'healthy' if lifecycle is not None else 'degraded',
        'flash_lifecycle': lifecycle is not None,
        'flash_persistent': bool(lifecycle and lifecycle.session_available()),
        'timestamp': datetime.now(timezone.utc).isoformat()
    }
    return jsonify(status), 200 if status['status'] == 'healthy' else 503
