import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from weightlog.config import config

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=app.config.get('LOG_LEVEL', 'INFO')
    )

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    CORS(app)

    # Import models
    from weightlog.models import User, WeightEntry, UserProfile

    # Register blueprints
    from weightlog.routes.auth import auth_bp
    from weightlog.routes.entries import entries_bp
    from weightlog.routes.profile import profile_bp
    from weightlog.routes.analytics import analytics_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(entries_bp, url_prefix='/api/entries')
    app.register_blueprint(profile_bp, url_prefix='/api/profile')
    app.register_blueprint(analytics_bp, url_prefix='/api/analytics')

    app.logger.info("Entry store backend: %s", app.config['ENTRY_STORE'])

    # Health check endpoint
    @app.route('/api/health')
    def health_check():
        return {'status': 'healthy', 'message': 'Weight Tracker API is running'}

    return app
