import os
import logging
from flask import Flask, request, jsonify
from sqlalchemy import text

from config import config, get_config_name, validate_config
from models import db
from middleware.cors import setup_cors, log_cors_info
from routes import load_blueprints
from services.departments import DEPARTMENTS, endpoint_map


def create_app(config_name=None):
    """
    Application factory
    """
    if config_name is None:
        config_name = get_config_name()

    app = Flask(__name__)

    try:
        valid, message = validate_config(config_name)
        if not valid:
            raise ValueError(message)

        config_instance = config[config_name]()
        app.config.from_object(config_instance)
        app.logger.info(f"✓ Configuration loaded for {config_name} environment")

        db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        app.logger.info(f"✓ Using database: {db_uri.split('://')[0] if '://' in db_uri else 'unknown'}")
    except Exception as config_error:
        app.logger.error(f"❌ Configuration loading failed: {config_error}")
        raise

    # Instance folder holds the SQLite file in development
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError as e:
        app.logger.warning(f"Could not create instance folder: {e}")

    db.init_app(app)
    setup_cors(app)

    # Logging
    log_level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    if config_name == 'production':
        logging.basicConfig(level=log_level)
        app.logger.setLevel(log_level)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        app.logger.addHandler(handler)
        app.logger.info("✓ Production logging configured")
    elif app.debug:
        app.logger.setLevel(logging.DEBUG)
        app.logger.info("✓ Debug logging enabled")
    else:
        app.logger.setLevel(log_level)

    log_cors_info(app)

    # Blueprints
    blueprints, registry = load_blueprints()
    for blueprint, url_prefix, description in blueprints:
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        app.logger.info(f"✓ Registered {description} blueprint at {url_prefix}")
    if registry['failed']:
        app.logger.error(f"Failed blueprints: {[failure['name'] for failure in registry['failed']]}")

    @app.route('/')
    def index():
        """Root endpoint listing the department resources"""
        return jsonify({
            'message': 'STPI Office Portal API',
            'status': 'running',
            'environment': config_name,
            'departments': [
                {key: department[key] for key in ('key', 'title', 'description', 'path')}
                for department in DEPARTMENTS
            ],
            'endpoints': endpoint_map(),
            'health': '/api/health',
            'blueprint_status': {
                'registered': registry['successful'],
                'failed': [failure['name'] for failure in registry['failed']],
            }
        })

    # Error handlers keep the {"error": ...} body shape
    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify({'error': f'The requested endpoint {request.path} does not exist'}), 404
        return jsonify({'error': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': f'The method {request.method} is not allowed for endpoint {request.path}'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Internal server error: {error}")
        return jsonify({'error': 'Internal Server Error'}), 500

    with app.app_context():
        try:
            db.session.execute(text('SELECT 1'))
            db.create_all()
            app.logger.info("✓ Database tables created/verified successfully")
        except Exception as db_error:
            app.logger.error(f"❌ Database initialization error: {db_error}")
            if config_name != 'production':
                raise

    app.logger.info(f"✓ STPI Office Portal API created ({len(list(app.url_map.iter_rules()))} routes)")
    return app


if __name__ == '__main__':
    local_app = create_app()
    port = int(os.environ.get('PORT', 5000))
    local_app.run(host='0.0.0.0', port=port, debug=local_app.config.get('DEBUG', False))
