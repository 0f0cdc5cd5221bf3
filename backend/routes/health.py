from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from datetime import datetime
from models import db, COLLECTIONS

health_bp = Blueprint('health', __name__)

SERVICE_NAME = 'STPI Office Portal API'
DEPARTMENT_BLUEPRINTS = ['datacom', 'exim', 'incubation', 'projects']


def _database_type(db_url):
    db_url = (db_url or '').lower()
    if 'sqlite' in db_url:
        return 'SQLite'
    if 'postgresql' in db_url or 'postgres' in db_url:
        return 'PostgreSQL'
    return 'Unknown'


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint
    Tests database connectivity, configuration and registered department routes
    """
    health_status = {
        'status': 'healthy',
        'app': SERVICE_NAME,
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'checks': {}
    }
    status_code = 200

    # Database connection and document counts
    try:
        db.session.execute(text('SELECT 1'))
        counts = {name: model.query.count() for name, model in COLLECTIONS.items()}
        health_status['checks']['database'] = {
            'status': 'healthy',
            'type': _database_type(current_app.config.get('SQLALCHEMY_DATABASE_URI')),
            'connected': True,
            'collections': counts
        }
    except Exception as db_error:
        db.session.rollback()
        current_app.logger.error(f"Database health check failed: {db_error}")
        health_status['checks']['database'] = {
            'status': 'unhealthy',
            'connected': False,
            'error': str(db_error)
        }

    # Configuration
    health_status['checks']['configuration'] = {
        'status': 'healthy',
        'environment': current_app.config.get('ENV_NAME'),
        'office_timezone': current_app.config.get('OFFICE_TIMEZONE'),
        'cors_configured': bool(current_app.config.get('CORS_ORIGINS'))
    }

    # Department blueprints
    registered = list(current_app.blueprints.keys())
    missing = [name for name in DEPARTMENT_BLUEPRINTS if name not in registered]
    health_status['checks']['application'] = {
        'status': 'healthy' if not missing else 'warning',
        'blueprints': {'registered': registered, 'missing': missing},
        'api_routes': len([rule for rule in current_app.url_map.iter_rules()
                           if rule.rule.startswith('/api/')])
    }
    if missing:
        current_app.logger.warning(f"Missing department blueprints: {missing}")

    statuses = [check['status'] for check in health_status['checks'].values()]
    if 'unhealthy' in statuses:
        health_status['status'] = 'unhealthy'
        status_code = 503
    elif 'warning' in statuses:
        health_status['status'] = 'degraded'

    current_app.logger.info(f"Health check completed: {health_status['status']}")
    return jsonify(health_status), status_code


@health_bp.route('/health/simple', methods=['GET'])
def simple_health_check():
    """
    Simple health check for load balancers
    """
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({'status': 'healthy', 'message': 'Service is running'}), 200
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Simple health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'message': 'Database connection failed'}), 503
