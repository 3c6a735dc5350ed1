"""
Toast renderer
Turns queued notifications into the container markup, inline styles and the
inline script that animates, times out and (optionally) beeps them
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping

from jinja2 import Environment
from markupsafe import Markup

from toast_models import Notification, NotificationLevel, NotificationPosition

LEVEL_ICONS = {
    NotificationLevel.SUCCESS: '✓',
    NotificationLevel.ERROR: '✕',
    NotificationLevel.WARNING: '⚠',
    NotificationLevel.INFO: 'ℹ',
}

LEVEL_COLORS = {
    NotificationLevel.SUCCESS: {'light': '#22c55e', 'dark': '#34c759'},
    NotificationLevel.ERROR: {'light': '#ef4444', 'dark': '#ff453a'},
    NotificationLevel.WARNING: {'light': '#f59e0b', 'dark': '#ff9f0a'},
    NotificationLevel.INFO: {'light': '#3b82f6', 'dark': '#0a84ff'},
}

# Hz, one short sine beep per level
SOUND_FREQUENCIES = {
    NotificationLevel.SUCCESS: 800,
    NotificationLevel.ERROR: 400,
    NotificationLevel.WARNING: 600,
    NotificationLevel.INFO: 700,
}

THEMES = {
    'light': {'background': '255, 255, 255', 'border': 'rgba(0, 0, 0, 0.1)', 'text': 'rgba(0, 0, 0, 0.9)'},
    'dark': {'background': '30, 30, 30', 'border': 'rgba(255, 255, 255, 0.1)', 'text': 'rgba(255, 255, 255, 0.9)'},
}

MOBILE_BREAKPOINT = 640

CONTAINER_TEMPLATE = """\
<div id="{{ config.container_id }}" class="{{ p }}-container {{ p }}-position-{{ position }}" \
style="z-index: {{ config.z_index|int }}; direction: {{ 'rtl' if config.rtl else 'ltr' }};" \
aria-live="polite">
{%- for toast in toasts %}
<div id="{{ toast.id }}" class="{{ p }}-notification {{ p }}-{{ toast.level }}" role="status" \
data-level="{{ toast.level }}" data-id="{{ toast.id }}" data-duration="{{ toast.duration }}">
<div class="{{ p }}-icon">{{ toast.icon }}</div>
<div class="{{ p }}-content">
<div class="{{ p }}-title">{{ toast.title }}</div>
{%- if toast.body %}
<div class="{{ p }}-message">{{ toast.body }}</div>
{%- endif %}
</div>
{%- if toast.time %}
<div class="{{ p }}-time">{{ toast.time }}</div>
{%- endif %}
{%- if toast.closable %}
<button class="{{ p }}-close {{ p }}-close-{{ config.close_button_style }}" type="button" \
aria-label="Close notification">×</button>
{%- endif %}
</div>
{%- endfor %}
</div>"""

STYLE_TEMPLATE = """
<style id="{{ p }}-styles">
.{{ p }}-container {
    position: fixed;
    pointer-events: none;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
    font-size: 14px;
    line-height: 1.4;
}
.{{ p }}-position-top-right { top: 20px; right: 20px; }
.{{ p }}-position-top-left { top: 20px; left: 20px; }
.{{ p }}-position-bottom-right { bottom: 20px; right: 20px; }
.{{ p }}-position-bottom-left { bottom: 20px; left: 20px; }
.{{ p }}-position-top-center { top: 20px; left: 50%; transform: translateX(-50%); }
.{{ p }}-position-bottom-center { bottom: 20px; left: 50%; transform: translateX(-50%); }
.{{ p }}-notification {
    position: relative;
    display: flex;
    align-items: flex-start;
    gap: 12px;
    min-width: {{ config.min_width|int }}px;
    max-width: {{ config.max_width|int }}px;
    padding: 16px 20px;
    margin-bottom: 12px;
    border-radius: {{ config.border_radius|int }}px;
    backdrop-filter: blur({{ config.background_blur|int }}px);
    -webkit-backdrop-filter: blur({{ config.background_blur|int }}px);
    box-shadow: 0 8px 32px rgba(0, 0, 0, 0.12), 0 2px 8px rgba(0, 0, 0, 0.08);
    pointer-events: auto;
    transition: all {{ config.animation_duration|int }}ms cubic-bezier(0.4, 0, 0.2, 1);
    transform: translateX(100%) scale(0.95);
    opacity: 0;
    overflow: hidden;
    background: rgba({{ theme.background }}, {{ opacity }});
    border: 1px solid {{ theme.border }};
}
.{{ p }}-notification.{{ p }}-show { transform: translateX(0) scale(1); opacity: 1; }
.{{ p }}-notification.{{ p }}-hide {
    transform: translateX(100%) scale(0.95);
    opacity: 0;
    margin-bottom: 0;
    max-height: 0;
    padding: 0;
}
.{{ p }}-position-top-left .{{ p }}-notification,
.{{ p }}-position-bottom-left .{{ p }}-notification,
.{{ p }}-position-top-left .{{ p }}-notification.{{ p }}-hide,
.{{ p }}-position-bottom-left .{{ p }}-notification.{{ p }}-hide { transform: translateX(-100%) scale(0.95); }
.{{ p }}-position-top-center .{{ p }}-notification,
.{{ p }}-position-bottom-center .{{ p }}-notification,
.{{ p }}-position-top-center .{{ p }}-notification.{{ p }}-hide,
.{{ p }}-position-bottom-center .{{ p }}-notification.{{ p }}-hide { transform: translateY(-100%) scale(0.95); }
.{{ p }}-container .{{ p }}-notification.{{ p }}-show:not(.{{ p }}-hide) { transform: translate(0, 0) scale(1); }
.{{ p }}-icon {
    display: flex;
    align-items: center;
    justify-content: center;
    width: 20px;
    height: 20px;
    border-radius: 50%;
    font-size: 12px;
    font-weight: 600;
    flex-shrink: 0;
    margin-top: 2px;
    color: white;
}
.{{ p }}-content { flex: 1; min-width: 0; }
.{{ p }}-title { margin: 0 0 4px 0; font-weight: 600; line-height: 1.2; color: {{ theme.text }}; }
.{{ p }}-message { margin: 0; font-size: 13px; opacity: 0.8; line-height: 1.3; color: {{ theme.text }}; }
.{{ p }}-time {
    position: absolute;
    top: 12px;
    right: 36px;
    font-size: 11px;
    opacity: 0.6;
    font-variant-numeric: tabular-nums;
    color: {{ theme.text }};
}
.{{ p }}-close {
    position: absolute;
    top: 12px;
    right: 12px;
    width: 20px;
    height: 20px;
    display: flex;
    align-items: center;
    justify-content: center;
    border: none;
    color: {{ theme.text }};
    font-size: 12px;
    cursor: pointer;
    opacity: 0.7;
    transition: all 0.2s ease;
}
.{{ p }}-close-circle { border-radius: 50%; background: rgba(128, 128, 128, 0.2); }
.{{ p }}-close-minimal { background: none; }
.{{ p }}-close:hover { opacity: 1; }
{%- for level, palette in colors %}
.{{ p }}-{{ level }} .{{ p }}-icon { background: {{ palette.light }}; }
{%- endfor %}
@media (max-width: {{ breakpoint }}px) {
    .{{ p }}-container { left: 10px; right: 10px; transform: none; }
    .{{ p }}-notification { min-width: auto; max-width: none; margin-bottom: 8px; }
}
@media (prefers-reduced-motion: reduce) {
    .{{ p }}-notification { transition: none; }
}
{%- if auto_theme %}
@media (prefers-color-scheme: dark) {
    .{{ p }}-notification { background: rgba({{ dark.background }}, {{ opacity }}); border-color: {{ dark.border }}; }
    .{{ p }}-title, .{{ p }}-message, .{{ p }}-time, .{{ p }}-close { color: {{ dark.text }}; }
    {%- for level, palette in colors %}
    .{{ p }}-{{ level }} .{{ p }}-icon { background: {{ palette.dark }}; }
    {%- endfor %}
}
{%- endif %}
</style>"""

SCRIPT_TEMPLATE = """
<script id="{{ p }}-script">
(function() {
    'use strict';
    var config = {{ settings|tojson }};
    var timers = {};
    var container = null;

    function cls(name) { return config.prefix + '-' + name; }

    function hide(el) {
        if (timers[el.id]) {
            clearTimeout(timers[el.id]);
            delete timers[el.id];
        }
        el.classList.add(cls('hide'));
        setTimeout(function() {
            if (el.parentNode) { el.parentNode.removeChild(el); }
        }, config.animationDuration);
    }

    function schedule(el) {
        var duration = parseInt(el.dataset.duration, 10);
        if (!config.autoDismiss || !duration) { return; }
        timers[el.id] = setTimeout(function() { hide(el); }, duration);
    }

    function beep(level) {
        try {
            var Ctx = window.AudioContext || window.webkitAudioContext;
            if (!Ctx) { return; }
            var audio = new Ctx();
            var osc = audio.createOscillator();
            var gain = audio.createGain();
            osc.connect(gain);
            gain.connect(audio.destination);
            osc.type = 'sine';
            osc.frequency.setValueAtTime(config.frequencies[level] || 700, audio.currentTime);
            gain.gain.setValueAtTime(0.1, audio.currentTime);
            gain.gain.exponentialRampToValueAtTime(0.01, audio.currentTime + 0.1);
            osc.start(audio.currentTime);
            osc.stop(audio.currentTime + 0.1);
        } catch (err) {
            console.warn('Could not play notification sound:', err);
        }
    }

    function show(el) {
        requestAnimationFrame(function() {
            el.classList.add(cls('show'));
            if (config.sound) { beep(el.dataset.level); }
            schedule(el);
        });
    }

    function init() {
        container = document.getElementById(config.containerId);
        if (!container || container.dataset.ready) { return; }
        container.dataset.ready = '1';

        container.addEventListener('click', function(e) {
            var button = e.target.closest('.' + cls('close'));
            if (button) { hide(button.closest('.' + cls('notification'))); }
        });
        if (config.pauseOnHover) {
            container.addEventListener('mouseover', function(e) {
                var el = e.target.closest('.' + cls('notification'));
                if (el && timers[el.id]) {
                    clearTimeout(timers[el.id]);
                    delete timers[el.id];
                }
            });
            container.addEventListener('mouseout', function(e) {
                var el = e.target.closest('.' + cls('notification'));
                if (el && !el.contains(e.relatedTarget) && !timers[el.id]) { schedule(el); }
            });
        }

        var toasts = container.querySelectorAll('.' + cls('notification'));
        var hidden = Math.max(0, toasts.length - config.maxNotifications);
        Array.prototype.forEach.call(toasts, function(el, index) {
            if (index < hidden) {
                el.parentNode.removeChild(el);
                return;
            }
            setTimeout(function() { show(el); }, (index - hidden) * config.staggerDelay);
        });
    }

    if (document.readyState === 'loading') {
        document.addEventListener('DOMContentLoaded', init);
    } else {
        init();
    }
})();
</script>"""


def format_time(timestamp: int, time_format: str = '12') -> str:
    """Clock label for a toast: '3:07 PM' or '15:07'"""
    moment = datetime.fromtimestamp(timestamp)
    if str(time_format) == '24':
        return f"{moment.hour:02d}:{moment.minute:02d}"
    period = 'PM' if moment.hour >= 12 else 'AM'
    return f"{moment.hour % 12 or 12}:{moment.minute:02d} {period}"


class ToastRenderer:
    """Builds the HTML, CSS and JS for a batch of notifications"""

    stagger_delay = 100

    def __init__(self):
        self.env = Environment(autoescape=True, trim_blocks=False)
        self.container_template = self.env.from_string(CONTAINER_TEMPLATE)
        self.style_template = self.env.from_string(STYLE_TEMPLATE)
        self.script_template = self.env.from_string(SCRIPT_TEMPLATE)

    def render(self, notifications: List[Notification], config: Mapping[str, Any]) -> Markup:
        prefix = config.get('css_prefix', 'toast')
        html = self.render_container(notifications, config, prefix)
        html += self.render_styles(config, prefix)
        html += self.render_script(config, prefix)
        return Markup(html)

    def _toast_context(self, notification: Notification, config: Mapping[str, Any]) -> Dict[str, Any]:
        # Per-toast options win over the global config
        show_time = notification.get_option('show_time', config.get('show_time'))
        time_format = notification.get_option('time_format', config.get('time_format', '12'))
        duration = notification.get_option('duration', config.get('duration', 0))
        if not notification.get_option('auto_dismiss', True):
            duration = 0
        return {
            'id': notification.id,
            'level': notification.level.value,
            'icon': LEVEL_ICONS[notification.level],
            'title': notification.title,
            'body': notification.body,
            'time': format_time(notification.created_at, time_format) if show_time else '',
            'closable': notification.get_option('show_close_button', config.get('show_close_button')),
            'duration': int(duration or 0),
        }

    def render_container(self, notifications, config, prefix) -> str:
        position = NotificationPosition.coerce(config.get('position'))
        return self.container_template.render(
            p=prefix,
            config=config,
            position=position.value,
            toasts=[self._toast_context(n, config) for n in notifications],
        )

    def render_styles(self, config, prefix) -> str:
        theme_name = config.get('theme', 'auto')
        return self.style_template.render(
            p=prefix,
            config=config,
            theme=THEMES.get(theme_name, THEMES['light']),
            dark=THEMES['dark'],
            auto_theme=theme_name not in THEMES,
            opacity=float(config.get('background_opacity', 0.85)),
            colors=[(level.value, colors) for level, colors in LEVEL_COLORS.items()],
            breakpoint=MOBILE_BREAKPOINT,
        )

    def render_script(self, config, prefix) -> str:
        settings = {
            'prefix': prefix,
            'containerId': config.get('container_id'),
            'duration': config.get('duration'),
            'animationDuration': config.get('animation_duration'),
            'autoDismiss': bool(config.get('auto_dismiss')),
            'sound': bool(config.get('sound')),
            'pauseOnHover': bool(config.get('pause_on_hover')),
            'maxNotifications': config.get('max_notifications'),
            'staggerDelay': self.stagger_delay,
            'frequencies': {level.value: hz for level, hz in SOUND_FREQUENCIES.items()},
        }
        return self.script_template.render(p=prefix, settings=settings)
