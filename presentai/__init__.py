# presentai/__init__.py
import logging

from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_cors import CORS
from flask_wtf.csrf import CSRFProtect, CSRFError
from config import Config

# Initialize Flask extensions first, bind them to the app inside create_app
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
cors = CORS()


# JSON API: answer 401 instead of redirecting to a login page
@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(error="Unauthorized"), 401


def create_app(config_class=Config):
    """Factory function to create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_path=config_class.INSTANCE_PATH, instance_relative_config=False)

    # Load configuration from the specified config_class object.
    app.config.from_object(config_class)

    app.logger.setLevel(logging.INFO)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    cors.init_app(app, origins=app.config.get("CORS_ORIGINS", "*"),
                  supports_credentials=app.config.get("CORS_SUPPORTS_CREDENTIALS", False))

    # Register 'before_request' hook
    @app.before_request
    def log_request_info():
        app.logger.debug(f"--> BEFORE_REQUEST: Path={request.path}, Method={request.method}")

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        app.logger.warning(f"CSRF validation failed on {request.path}: {e.description}")
        return jsonify(error=e.description), 400

    # Import models within app context
    with app.app_context():
        from . import models

    # --- Blueprint Registration ---
    from .routes import main as main_blueprint
    app.register_blueprint(main_blueprint)

    from .commands import register_commands
    register_commands(app)

    # Log key config values
    app.logger.info(f"Database URI: {app.config.get('SQLALCHEMY_DATABASE_URI')}")
    app.logger.info(f"Image provider: {app.config.get('IMAGE_PROVIDER')}")
    app.logger.info(f"Text model: {app.config.get('OPENAI_TEXT_MODEL')}")
    app.logger.info(f"OpenAI API Key Loaded: {'Yes' if app.config.get('OPENAI_API_KEY') else 'No'}")
    app.logger.info(f"S3 Bucket: {app.config.get('S3_BUCKET') or 'NOT CONFIGURED'}")

    return app
