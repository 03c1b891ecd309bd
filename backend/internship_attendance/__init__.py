"""Internship Attendance Service - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"]
)

def create_app(config_name: str = None, clock=None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from internship_attendance.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Clock used for time windows and day bucketing
    from internship_attendance.services.clock import SystemClock
    app.extensions['attendance_clock'] = clock or SystemClock()

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'Internship Attendance Service',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from internship_attendance.api.internship import internship_bp
    from internship_attendance.api.internship_admin import internship_admin_bp

    # Student attendance
    app.register_blueprint(internship_bp, url_prefix='/api/internship')

    # Admin Management
    app.register_blueprint(internship_admin_bp, url_prefix='/api/admin/internships')

    # Swagger UI
    try:
        from flask_swagger_ui import get_swaggerui_blueprint
        from internship_attendance.utils.swagger import generate_swagger_spec

        SWAGGER_URL = '/api/docs'
        API_URL = '/api/swagger.json'

        @app.route('/api/swagger.json')
        def swagger_spec():
            """Serve Swagger/OpenAPI specification."""
            return jsonify(generate_swagger_spec())

        swaggerui_bp = get_swaggerui_blueprint(
            SWAGGER_URL,
            API_URL,
            config={'app_name': "Internship Attendance API"}
        )
        app.register_blueprint(swaggerui_bp, url_prefix=SWAGGER_URL)
    except ImportError:
        app.logger.warning("Flask-Swagger-UI not installed")

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from internship_attendance.utils.helpers import handle_error
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(400)
    def bad_request(error):
        return handle_error(error, 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return handle_error(error, 401)

    @app.errorhandler(403)
    def forbidden(error):
        return handle_error(error, 403)

    @app.errorhandler(404)
    def not_found(error):
        return handle_error(error, 404)

    @app.errorhandler(429)
    def rate_limited(error):
        return handle_error(error, 429)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error(error, 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': True,
            'message': 'Token has expired',
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Invalid token',
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Authorization token required',
            'status_code': 401
        }), 401

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(app.config.get('LOG_LEVEL', logging.INFO))
        app.logger.info('Internship Attendance Service startup')

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models
        from internship_attendance.models import (
            User, UserRole,
            InternshipLocation, InternshipAssignment,
            InternshipAttendance, AttendanceStatus
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

        from internship_attendance.models.user import User, UserRole

        admin = User.query.filter_by(email='admin@college.edu').first()
        if not admin:
            admin = User(
                email='admin@college.edu',
                name='Internship Coordinator',
                role=UserRole.ADMIN
            )
            db.session.add(admin)
            db.session.commit()
            click.echo('Created admin user: admin@college.edu')

    @app.cli.command('seed-demo')
    def seed_demo():
        """Seed database with a demo internship site and students."""
        from internship_attendance.services.seed_service import SeedService

        try:
            SeedService.seed_all()
            click.echo('Database seeded successfully!')
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error seeding database: {str(e)}')
