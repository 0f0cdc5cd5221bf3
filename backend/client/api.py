# backend/client/api.py
import os
import logging
import requests

from services.departments import get_resource

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = 'http://localhost:5000/api'


class ApiError(Exception):
    """A request failed. ``status`` is None when the server was never reached."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __repr__(self):
        return f'<ApiError status={self.status} message={self.message!r}>'


class ApiClient:
    """Thin JSON wrapper over the portal REST API."""

    def __init__(self, base_url=None, session=None, timeout=None):
        base_url = base_url or os.environ.get('API_BASE_URL') or DEFAULT_API_BASE_URL
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method, path, payload=None):
        """
        Send one request and return the decoded JSON body

        Raises:
            ApiError: Transport failure or a non-2xx response; the message is
                the server's ``error`` text when it sent one
        """
        url = f'{self.base_url}{path}'
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f'Could not reach {url}: {e}')

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            if isinstance(body, dict) and body.get('error'):
                message = body['error']
            else:
                message = f'{method} {path} failed with status {response.status_code}'
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, status=response.status_code)

        return body

    def resource(self, name):
        return ResourceClient(self, name)


class ResourceClient:
    """CRUD calls for one resource from the department directory."""

    def __init__(self, api, name):
        self.api = api
        self.name = name
        entry = get_resource(name)
        self.kind = entry['kind']
        self.label = entry['label']
        self.discriminator = entry['discriminator']
        self.list_path = entry['list_path']
        self.create_path = entry['create_path']
        self.item_path = entry['item_path']

    def __repr__(self):
        return f'<ResourceClient {self.name}>'

    def list(self):
        return self.api.request('GET', self.list_path)

    def get(self, doc_id):
        return self.api.request('GET', self.item_path.format(id=doc_id))

    def create(self, document):
        return self.api.request('POST', self.create_path, document)

    def update(self, doc_id, document):
        return self.api.request('PUT', self.item_path.format(id=doc_id), document)

    def delete(self, doc_id):
        return self.api.request('DELETE', self.item_path.format(id=doc_id))
