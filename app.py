import os
import logging
# Configure logging
logging.basicConfig(level=logging.INFO)
from datetime import timedelta
from flask import Flask
from dotenv import load_dotenv

from toast_utils import Toasts
from toast_demo import toast_demo_bp

load_dotenv()

# ------------------------------------------------------------------------------
# App setup
# ------------------------------------------------------------------------------
app = Flask(__name__)

# Session stability - use stable secret key from env
app.secret_key = os.getenv('FLASK_SECRET', 'dev-secret-change-this')

# Toasts live in the session cookie between the redirect and the next page
app.config.update(
    SESSION_COOKIE_SAMESITE='Lax',
    SESSION_COOKIE_HTTPONLY=True,
    PERMANENT_SESSION_LIFETIME=timedelta(days=1),
    TOAST_STORAGE=os.getenv('TOAST_STORAGE', 'session'),
    TOAST_IMPORT_FLASHES=True,
)

toasts = Toasts(app)

# Register Blueprints
app.register_blueprint(toast_demo_bp)


if __name__ == '__main__':
    app.run(debug=os.getenv('FLASK_ENV') != 'production')
