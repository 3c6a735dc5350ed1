"""
Toast demo blueprint
A playground page for trying every level and the per-call options
"""

from flask import Blueprint, jsonify, redirect, render_template_string, request, url_for

from toast_utils import get_toast_manager

toast_demo_bp = Blueprint('toast_demo', __name__)

DEMO_PAGE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Toast Demo</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; max-width: 640px; margin: 40px auto; }
        label { display: block; margin-top: 12px; }
        input, select { width: 100%; padding: 6px; }
        button { margin-top: 16px; padding: 8px 16px; }
    </style>
</head>
<body>
    <h1>Toast Demo</h1>
    <form method="post" action="{{ url_for('toast_demo.trigger') }}">
        <label>Type
            <select name="type">
                {% for level in ['success', 'error', 'warning', 'info'] %}
                <option value="{{ level }}">{{ level|capitalize }}</option>
                {% endfor %}
            </select>
        </label>
        <label>Title <input name="title" value="Notification Title"></label>
        <label>Message <input name="message" value=""></label>
        <label>Position
            <select name="position">
                {% for position in positions %}
                <option value="{{ position }}">{{ position }}</option>
                {% endfor %}
            </select>
        </label>
        <label>Theme
            <select name="theme">
                <option value="auto">auto</option>
                <option value="light">light</option>
                <option value="dark">dark</option>
            </select>
        </label>
        <label>Duration (ms, 0 keeps it open) <input name="duration" type="number" value="5000"></label>
        <label>Time format
            <select name="time_format">
                <option value="12">12 hour</option>
                <option value="24">24 hour</option>
            </select>
        </label>
        <label><input type="checkbox" name="sound" value="1" checked> Sound</label>
        <label><input type="checkbox" name="show_time" value="1" checked> Show time</label>
        <button type="submit">Show toast</button>
    </form>
    {{ render_toasts() }}
</body>
</html>
"""

POSITIONS = ['top-right', 'top-left', 'top-center', 'bottom-right', 'bottom-left', 'bottom-center']


def options_from_form(form):
    """Per-call options from the demo form; unchecked boxes mean False"""
    options = {}
    if form.get('position'):
        options['position'] = form['position']
    if form.get('theme'):
        options['theme'] = form['theme']
    if form.get('duration'):
        try:
            options['duration'] = int(form['duration'])
        except ValueError:
            pass
    if form.get('time_format'):
        options['time_format'] = form['time_format']
    options['sound'] = form.get('sound') == '1'
    options['show_time'] = form.get('show_time') == '1'
    return options


@toast_demo_bp.route('/', methods=['GET'])
def index():
    manager = get_toast_manager()
    if not manager.has_notifications() and not request.args.get('quiet'):
        manager.success('Welcome!', 'The toast demo is up and running.')
        manager.info('Demo ready', 'Use the form below to try every notification type.')
    return render_template_string(DEMO_PAGE, positions=POSITIONS)


@toast_demo_bp.route('/', methods=['POST'])
def trigger():
    manager = get_toast_manager()
    level = request.form.get('type', 'info')
    if level not in ('success', 'error', 'warning', 'info'):
        level = 'info'
    title = request.form.get('title', 'Notification Title')
    message = request.form.get('message', '')

    manager.add(level, title, message, options_from_form(request.form))
    return redirect(url_for('toast_demo.index', quiet=1))


@toast_demo_bp.route('/pending', methods=['GET'])
def pending():
    """Queued toasts without rendering them"""
    notifications = get_toast_manager().get_notifications()
    return jsonify({
        'count': len(notifications),
        'notifications': [n.to_dict() for n in notifications],
    })


@toast_demo_bp.route('/pending/<toast_id>', methods=['DELETE'])
def dismiss(toast_id):
    removed = get_toast_manager().remove(toast_id)
    return jsonify({'success': removed}), (200 if removed else 404)
