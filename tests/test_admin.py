from app.models import db, User


def test_register_admin_with_key(client):
    resp = client.post('/api/admin/register', json={
        'name': 'Boss', 'email': 'boss@example.com', 'password': 'pw', 'adminKey': 'test-admin-key'
    })
    assert resp.status_code == 201
    assert resp.get_json()['user']['isAdmin'] is True


def test_register_admin_wrong_key(app, client):
    resp = client.post('/api/admin/register', json={
        'name': 'Boss', 'email': 'boss@example.com', 'password': 'pw', 'adminKey': 'guess'
    })
    assert resp.status_code == 403
    assert resp.get_json()['error'] == 'Invalid admin key'
    with app.app_context():
        assert User.query.filter_by(email='boss@example.com').first() is None


def test_register_admin_existing_email(client, farmer):
    resp = client.post('/api/admin/register', json={
        'name': 'Boss', 'email': 'farmer@example.com', 'password': 'pw', 'adminKey': 'test-admin-key'
    })
    assert resp.status_code == 409


def test_upgrade_to_admin(farmer_client):
    assert farmer_client.get('/api/admin/users').status_code == 403
    assert farmer_client.post('/api/admin/upgrade', json={'adminKey': 'nope'}).status_code == 403

    resp = farmer_client.post('/api/admin/upgrade', json={'adminKey': 'test-admin-key'})
    assert resp.status_code == 200
    assert resp.get_json()['user']['isAdmin'] is True
    assert farmer_client.get('/api/admin/users').status_code == 200


def test_admin_routes_require_session(client):
    assert client.get('/api/admin/users').status_code == 401
    assert client.get('/api/admin/stats').status_code == 401


def test_list_users_hides_passwords(admin_client, farmer):
    users = admin_client.get('/api/admin/users').get_json()
    assert {u['email'] for u in users} == {'admin@example.com', 'farmer@example.com'}
    for user in users:
        assert not any('password' in key.lower() for key in user)


def test_edit_user(app, admin_client, farmer, make_user):
    make_user('taken@example.com')
    url = f'/api/admin/users/{farmer}'

    assert admin_client.put(url, json={'email': 'taken@example.com'}).status_code == 409

    resp = admin_client.put(url, json={'name': 'Jane W', 'isAdmin': True, 'phone': '0711000000'})
    assert resp.status_code == 200
    assert resp.get_json()['isAdmin'] is True
    with app.app_context():
        user = db.session.get(User, farmer)
        assert user.name == 'Jane W'
        assert user.phone == '0711000000'


def test_admin_cannot_delete_self(app, admin_client):
    with app.app_context():
        admin_id = User.query.filter_by(email='admin@example.com').one().id
    assert admin_client.delete(f'/api/admin/users/{admin_id}').status_code == 400


def test_admin_delete_user(app, admin_client, farmer):
    assert admin_client.delete(f'/api/admin/users/{farmer}').status_code == 200
    with app.app_context():
        assert db.session.get(User, farmer) is None


def test_admin_products_include_unavailable(client, admin_client, farmer_client):
    product = farmer_client.post('/api/products', json={
        'name': 'Onions', 'price': 60, 'city': 'Kajiado', 'quantity': 30, 'unit': 'kg', 'available': False
    }).get_json()

    assert client.get('/api/products').get_json() == []
    listed = admin_client.get('/api/admin/products').get_json()
    assert [p['_id'] for p in listed] == [product['_id']]

    url = f"/api/admin/products/{product['_id']}"
    assert admin_client.put(url, json={'available': True}).get_json()['available'] is True
    assert admin_client.delete(url).status_code == 200
    assert admin_client.get('/api/admin/products').get_json() == []


def test_admin_farm_inputs(admin_client, farmer_client):
    item = farmer_client.post('/api/farminputs', json={
        'name': 'Hoe', 'price': 500, 'category': 'Tools', 'quantity': 3, 'unit': 'piece'
    }).get_json()
    url = f"/api/admin/farminputs/{item['_id']}"

    assert len(admin_client.get('/api/admin/farminputs').get_json()) == 1
    assert admin_client.put(url, json={'price': 450}).get_json()['price'] == 450.0
    assert admin_client.delete(url).status_code == 200
    assert admin_client.delete(url).status_code == 404


def test_admin_forum_moderation(admin_client, farmer_client, other_client):
    post = farmer_client.post('/api/forum/posts', json={'title': 'Spam?', 'content': 'buy now'}).get_json()
    commented = other_client.post(f"/api/forum/posts/{post['_id']}/comments", json={'content': 'spam'}).get_json()
    comment_id = commented['comments'][0]['_id']
    url = f"/api/admin/forum/posts/{post['_id']}"

    assert len(admin_client.get('/api/admin/forum/posts').get_json()) == 1
    assert admin_client.put(url, json={'category': 'market trends'}).get_json()['category'] == 'market trends'

    resp = admin_client.delete(f'{url}/comments/{comment_id}')
    assert resp.status_code == 200
    assert resp.get_json()['comments'] == []

    assert admin_client.delete(url).status_code == 200
    assert admin_client.get('/api/admin/forum/posts').get_json() == []


def test_non_admin_forbidden(farmer_client):
    for path in ('/api/admin/users', '/api/admin/products', '/api/admin/farminputs',
                 '/api/admin/forum/posts', '/api/admin/analytics', '/api/admin/stats'):
        assert farmer_client.get(path).status_code == 403, path


def test_stats(admin_client, farmer_client):
    farmer_client.post('/api/products', json={
        'name': 'Peas', 'price': 150, 'city': 'Nyeri', 'quantity': 8, 'unit': 'kg'
    })
    farmer_client.post('/api/forum/posts', json={'title': 'Hello', 'content': 'First post'})

    stats = admin_client.get('/api/admin/stats').get_json()
    assert stats['users'] == 2
    assert stats['products'] == 1
    assert stats['farmInputs'] == 0
    assert stats['forumPosts'] == 1
    assert len(stats['recentActivities']) == 4
    assert {a['type'] for a in stats['recentActivities']} == {'user', 'product', 'post'}
