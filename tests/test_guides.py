def _create_guide(client, crop='Maize', title='Spacing', content='75cm by 25cm'):
    resp = client.post('/api/guides', json={'crop': crop, 'title': title, 'content': content})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_crops_are_distinct_and_sorted(client, farmer_client):
    _create_guide(farmer_client, crop='Tomatoes')
    _create_guide(farmer_client, crop='Beans')
    _create_guide(farmer_client, crop='Tomatoes', title='Staking')

    assert client.get('/api/crops').get_json() == ['Beans', 'Tomatoes']


def test_guides_for_crop(client, farmer_client, farmer):
    _create_guide(farmer_client, crop='Maize')
    _create_guide(farmer_client, crop='Beans')

    guides = client.get('/api/guides/Maize').get_json()
    assert len(guides) == 1
    assert guides[0]['userId']['_id'] == farmer

    assert len(client.get('/api/guides?crop=Beans').get_json()) == 1
    assert len(client.get('/api/guides').get_json()) == 2


def test_guides_for_unknown_crop(client):
    resp = client.get('/api/guides/Quinoa')
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'No guides found for this crop'


def test_create_guide_requires_login_and_fields(client, farmer_client):
    assert client.post('/api/guides', json={'crop': 'Maize', 'title': 't', 'content': 'c'}).status_code == 401
    assert farmer_client.post('/api/guides', json={'crop': 'Maize'}).status_code == 400


def test_guide_ownership(farmer_client, other_client):
    guide = _create_guide(farmer_client)
    url = f"/api/guides/{guide['_id']}"

    assert other_client.put(url, json={'title': 'Mine now'}).status_code == 403
    assert farmer_client.put(url, json={'title': 'Row spacing'}).get_json()['title'] == 'Row spacing'

    assert other_client.delete(url).status_code == 403
    assert farmer_client.delete(url).status_code == 200
    assert farmer_client.delete(url).status_code == 404
