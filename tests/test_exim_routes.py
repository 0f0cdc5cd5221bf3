def test_create_stpi_unit(client, unit_data):
    response = client.post('/api/exim/stpi', json={**unit_data, 'type': 'non-stpi'})

    assert response.status_code == 201
    unit = response.get_json()
    assert unit['type'] == 'stpi'
    assert unit['name'] == 'Kakinada Softworks'
    assert unit['gst'] == '37ABCDE1234F1Z5'
    assert unit['roc'] == ''
    assert unit['legalAgreements'] == []
    assert unit['softexDetails'][0]['mpr'] == 'MPR-0424'


def test_stpi_and_non_stpi_lists_are_separate(client, unit_data):
    stpi = client.post('/api/exim/stpi', json=unit_data).get_json()
    non_stpi = client.post('/api/exim/non-stpi', json={**unit_data, 'name': 'Coastal Exports'}).get_json()

    stpi_list = client.get('/api/exim/stpi').get_json()
    non_stpi_list = client.get('/api/exim/non-stpi').get_json()

    assert [unit['_id'] for unit in stpi_list] == [stpi['_id']]
    assert [unit['_id'] for unit in non_stpi_list] == [non_stpi['_id']]
    assert non_stpi_list[0]['type'] == 'non-stpi'


def test_legal_agreements_accepted_on_non_stpi(client, unit_data):
    response = client.post('/api/exim/non-stpi',
                           json={**unit_data, 'legalAgreements': ['agreements/2024/lease.pdf']})

    assert response.status_code == 201
    assert response.get_json()['legalAgreements'] == ['agreements/2024/lease.pdf']


def test_numeric_softex_amount_is_stored_as_text(client, unit_data):
    data = {**unit_data, 'softexDetails': [{'year': 2024, 'month': 'May', 'amount': 98000.5, 'mpr': ''}]}

    unit = client.post('/api/exim/stpi', json=data).get_json()

    assert unit['softexDetails'][0]['year'] == '2024'
    assert unit['softexDetails'][0]['amount'] == '98000.5'


def test_missing_unit_name_is_rejected(client, unit_data):
    data = dict(unit_data)
    del data['name']

    response = client.post('/api/exim/stpi', json=data)

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Unit validation failed: name: Path `name` is required.'
    assert client.get('/api/exim/stpi').get_json() == []


def test_update_unit_appends_financial_rows(client, unit_data):
    unit = client.post('/api/exim/stpi', json=unit_data).get_json()
    expenses = unit['financialExpenses'] + [{'year': '2024', 'amount': '4000', 'description': 'May'}]

    response = client.put(f"/api/exim/stpi/{unit['_id']}", json={'financialExpenses': expenses})

    assert response.status_code == 200
    updated = response.get_json()
    assert [row['description'] for row in updated['financialExpenses']] == ['April', 'May']
    assert updated['softexDetails'] == unit['softexDetails']


def test_update_and_delete_unknown_unit(client):
    missing = '/api/exim/non-stpi/64b000000000000000000000'

    assert client.put(missing, json={'name': 'x'}).get_json() == {'error': 'Unit not found'}
    response = client.delete(missing)
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Unit not found'}


def test_delete_unit(client, unit_data):
    unit = client.post('/api/exim/non-stpi', json=unit_data).get_json()

    response = client.delete(f"/api/exim/non-stpi/{unit['_id']}")

    assert response.status_code == 200
    assert response.get_json() == {'message': 'Unit deleted successfully'}
    assert client.get('/api/exim/non-stpi').get_json() == []
