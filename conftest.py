import pytest
from flask import Flask

from toast_demo import toast_demo_bp
from toast_utils import Toasts


def make_app(**config):
    app = Flask(__name__)
    app.secret_key = 'test-secret'
    app.config.update(TESTING=True, **config)
    Toasts(app)
    app.register_blueprint(toast_demo_bp)
    return app


@pytest.fixture
def app(monkeypatch):
    for name in ('TOAST_STORAGE', 'TOAST_POSITION', 'TOAST_DURATION', 'TOAST_CLOSABLE'):
        monkeypatch.delenv(name, raising=False)
    return make_app(TOAST_STORAGE='session')


@pytest.fixture
def client(app):
    return app.test_client()
