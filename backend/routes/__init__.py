"""
Routes package for the STPI office portal API
This package contains the Flask blueprints for each department resource.
"""

import logging

# Set up logger for route imports
logger = logging.getLogger(__name__)

# (module, blueprint attribute, url prefix, description)
BLUEPRINTS = [
    ('datacom', 'datacom_bp', '/api/datacom', 'Datacom'),
    ('exim', 'exim_bp', '/api/exim', 'Exim'),
    ('incubation', 'incubation_bp', '/api/incubation', 'Incubation'),
    ('projects', 'projects_bp', '/api/projects', 'Co Location'),
    ('health', 'health_bp', '/api', 'Health Check'),
]


def safe_import_blueprint(module_name, blueprint_name, description, registry):
    """
    Import a blueprint, recording the outcome in ``registry``

    Args:
        module_name (str): The module to import from (e.g., 'datacom')
        blueprint_name (str): The blueprint variable name (e.g., 'datacom_bp')
        description (str): Human-readable description for logging
        registry (dict): Collects 'successful' and 'failed' entries

    Returns:
        Blueprint or None: The imported blueprint or None if import failed
    """
    try:
        module = __import__(f'routes.{module_name}', fromlist=[blueprint_name])
        blueprint = getattr(module, blueprint_name)
        registry['successful'].append(description)
        logger.info(f"✓ {description} blueprint imported successfully")
        return blueprint

    except ImportError as e:
        logger.error(f"❌ Import error for {description}: {str(e)}")
        registry['failed'].append({'name': description, 'error': 'ImportError', 'details': str(e)})
        return None

    except AttributeError as e:
        logger.error(f"❌ Blueprint {blueprint_name} not found in {module_name}: {str(e)}")
        registry['failed'].append({'name': description, 'error': 'AttributeError', 'details': str(e)})
        return None


def load_blueprints():
    """
    Import every blueprint listed in BLUEPRINTS

    Returns:
        tuple: ([(blueprint, url_prefix, description), ...], registry)
    """
    registry = {'successful': [], 'failed': []}
    loaded = []
    for module_name, blueprint_name, url_prefix, description in BLUEPRINTS:
        blueprint = safe_import_blueprint(module_name, blueprint_name, description, registry)
        if blueprint is not None:
            loaded.append((blueprint, url_prefix, description))

    logger.info(f"Blueprint import summary: {len(registry['successful'])}/{len(BLUEPRINTS)} successful")
    for failure in registry['failed']:
        logger.warning(f"  - {failure['name']}: {failure['error']} - {failure['details']}")

    return loaded, registry
