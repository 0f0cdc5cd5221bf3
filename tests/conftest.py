"""
Shared fixtures: a fresh in-memory app per test, its Flask test client, and
an ApiClient whose requests session is routed into that test client.
"""
import os
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

os.environ['FLASK_ENV'] = 'testing'

from app import create_app
from models import db
from client.api import ApiClient

API_BASE_URL = 'http://portal.test/api'


class FlaskTestAdapter(BaseAdapter):
    """requests transport adapter that serves requests from a Flask test client."""

    def __init__(self, test_client):
        super().__init__()
        self.test_client = test_client

    def send(self, request, **kwargs):
        url = urlsplit(request.url)
        headers = {key: value for key, value in request.headers.items()
                   if key.lower() not in ('content-type', 'content-length')}
        flask_response = self.test_client.open(
            url.path,
            method=request.method,
            query_string=url.query,
            data=request.body,
            content_type=request.headers.get('Content-Type'),
            headers=headers,
        )

        response = requests.Response()
        response.status_code = flask_response.status_code
        response.reason = flask_response.status.split(' ', 1)[-1]
        response.headers = CaseInsensitiveDict(dict(flask_response.headers))
        response._content = flask_response.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class UnreachableAdapter(BaseAdapter):
    """Fails every request the way a refused connection does."""

    def send(self, request, **kwargs):
        raise requests.ConnectionError(f'Connection refused: {request.url}')

    def close(self):
        pass


@pytest.fixture
def app():
    """Application built with the testing config (in-memory SQLite)"""
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def api(client):
    """ApiClient talking to the test app"""
    session = requests.Session()
    session.mount('http://portal.test', FlaskTestAdapter(client))
    return ApiClient(base_url=API_BASE_URL, session=session)


@pytest.fixture
def offline_api():
    """ApiClient whose server can never be reached"""
    session = requests.Session()
    session.mount('http://', UnreachableAdapter())
    return ApiClient(base_url=API_BASE_URL, session=session)


@pytest.fixture
def customer_data():
    """Required Customer fields"""
    return {
        'companyName': 'Acme',
        'managerName': 'A',
        'managerPhone': '1',
        'managerEmail': 'a@a.com',
        'managerDesignation': 'Mgr',
        'leaderName': 'L',
        'leaderPhone': '2',
        'leaderEmail': 'l@l.com',
        'leaderDesignation': 'Lead',
        'startDate': '2024-01-01',
        'endDate': '2024-12-31',
        'bandwidth': '100Mbps',
    }


@pytest.fixture
def unit_data():
    """Required Unit fields plus a few optional ones"""
    return {
        'name': 'Kakinada Softworks',
        'startDate': '2023-04-01',
        'endDate': '2028-03-31',
        'gst': '37ABCDE1234F1Z5',
        'softexDetails': [{'year': '2024', 'month': 'April', 'amount': '150000', 'mpr': 'MPR-0424'}],
        'financialExpenses': [{'year': '2024', 'amount': '2500', 'description': 'April'}],
    }


@pytest.fixture
def colocation_data():
    """Required CoLocation fields"""
    return {
        'customerName': 'RackCo',
        'managerName': 'M',
        'managerEmail': 'm@rackco.in',
        'managerPhone': '9000000001',
        'managerDesignation': 'Director',
        'adminName': 'Ad',
        'adminEmail': 'admin@rackco.in',
        'adminPhone': '9000000002',
        'adminDesignation': 'Sysadmin',
        'rackSpaceUnits': 4,
        'dataTransferGB': 500,
        'activationDate': '2024-06-01',
        'agreementEntered': True,
        'totalAnnualCharges': 120000,
        'quarterlyCharges': 30000,
    }
