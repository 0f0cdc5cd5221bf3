"""
Client-side models of the portal's pages: an HTTP wrapper over the REST
resources, list/detail/form data views, and form drafts.
"""

from .api import ApiClient, ApiError, ResourceClient
from .forms import FormDraft
from .views import DataView, Notifier, department_views

__all__ = [
    'ApiClient',
    'ApiError',
    'ResourceClient',
    'FormDraft',
    'DataView',
    'Notifier',
    'department_views',
]
