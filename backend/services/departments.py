# backend/services/departments.py
"""
Department directory for the regional office dashboard.

Each department lists the REST resources behind its tabs. A resource entry
names the entity kind it stores and the paths (relative to the ``/api``
prefix) used to list, create and address single documents.
"""

DEPARTMENTS = [
    {
        'key': 'datacom',
        'title': 'Datacom',
        'description': 'Manage RF and LAN customers with technical details',
        'path': '/datacom',
        'resources': ['datacom-rf', 'datacom-lan'],
    },
    {
        'key': 'exim',
        'title': 'Exim',
        'description': 'Handle STPI and Non-STPI units with compliance data',
        'path': '/exim',
        'resources': ['exim-stpi', 'exim-non-stpi'],
    },
    {
        'key': 'incubation',
        'title': 'Incubation',
        'description': 'Support startup customers and innovation projects',
        'path': '/incubation',
        'resources': ['incubation'],
    },
    {
        'key': 'colocation',
        'title': 'Co Location',
        'description': 'Track and manage co location customers and racks',
        'path': '/projects',
        'resources': ['projects'],
    },
]


def _resource(kind, list_path, create_path=None, label=None, discriminator=None):
    return {
        'kind': kind,
        'label': label,
        'discriminator': discriminator,
        'list_path': list_path,
        'create_path': create_path or list_path,
        'item_path': list_path + '/{id}',
    }


RESOURCES = {
    'datacom-rf': _resource('customer', '/datacom/rf', label='RF Customers', discriminator='rf'),
    'datacom-lan': _resource('customer', '/datacom/lan', label='LAN Customers', discriminator='lan'),
    'exim-stpi': _resource('unit', '/exim/stpi', label='STPI Units', discriminator='stpi'),
    'exim-non-stpi': _resource('unit', '/exim/non-stpi', label='Non-STPI Units', discriminator='non-stpi'),
    'incubation': _resource('customer', '/incubation', label='Incubation Customers', discriminator='incubation'),
    'projects': _resource('colocation', '/projects', create_path='/projects/add', label='Co Location Customers'),
}


def get_resource(name):
    try:
        return RESOURCES[name]
    except KeyError:
        raise KeyError(f"Unknown resource: {name}")


def get_department(key):
    for department in DEPARTMENTS:
        if department['key'] == key:
            return department
    raise KeyError(f"Unknown department: {key}")


def endpoint_map(prefix='/api'):
    """Department key -> list endpoints, for the API index page."""
    return {
        department['key']: [prefix + RESOURCES[name]['list_path'] for name in department['resources']]
        for department in DEPARTMENTS
    }
