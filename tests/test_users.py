import io

from app.models import db, User, Product, FarmInput, ForumPost, ForumComment, FarmingGuide


def _populate(farmer_client, other_client):
    product = farmer_client.post('/api/products', data={
        'name': 'Cabbage', 'price': '40', 'city': 'Limuru', 'quantity': '20', 'unit': 'heads',
        'image': (io.BytesIO(b'cabbage'), 'cabbage.png'),
    }, content_type='multipart/form-data').get_json()
    farmer_client.post('/api/farminputs', json={
        'name': 'CAN', 'price': 3000, 'category': 'Fertilizers', 'quantity': 5, 'unit': 'bag'
    })
    farmer_client.post('/api/guides', json={'crop': 'Cabbage', 'title': 'Transplanting', 'content': 'At 4 weeks'})
    own_post = farmer_client.post('/api/forum/posts', json={'title': 'Mine', 'content': 'x'}).get_json()
    other_post = other_client.post('/api/forum/posts', json={'title': 'Theirs', 'content': 'y'}).get_json()

    farmer_client.post(f"/api/forum/posts/{other_post['_id']}/comments", json={'content': 'Nice'})
    farmer_client.post(f"/api/forum/posts/{other_post['_id']}/like")
    other_client.post(f"/api/forum/posts/{own_post['_id']}/comments", json={'content': 'Agreed'})
    return product, other_post


def test_self_delete_cascades(app, client, farmer_client, other_client, farmer):
    product, other_post = _populate(farmer_client, other_client)
    image = app.config['UPLOAD_FOLDER'] / product['image'].split('/')[-1]
    assert image.exists()

    resp = farmer_client.delete(f'/api/users/{farmer}')
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'User and associated products deleted successfully'

    with app.app_context():
        assert db.session.get(User, farmer) is None
        assert Product.query.filter_by(farmer_id=farmer).count() == 0
        assert FarmInput.query.filter_by(seller_id=farmer).count() == 0
        assert FarmingGuide.query.filter_by(user_id=farmer).count() == 0
        assert ForumComment.query.filter_by(author_id=farmer).count() == 0
        assert [p.title for p in ForumPost.query.all()] == ['Theirs']
        assert db.session.get(ForumPost, other_post['_id']).likes == []

    assert not image.exists()
    # Logged out along with the account
    assert farmer_client.get('/api/currentuser').status_code == 401


def test_cannot_delete_someone_else(farmer_client, other_client, farmer):
    assert other_client.delete(f'/api/users/{farmer}').status_code == 403


def test_admin_can_delete_user(app, admin_client, farmer_client, farmer):
    farmer_client.post('/api/products', json={
        'name': 'Beans', 'price': 120, 'city': 'Meru', 'quantity': 10, 'unit': 'kg'
    })
    assert admin_client.delete(f'/api/users/{farmer}').status_code == 200
    with app.app_context():
        assert Product.query.count() == 0


def test_delete_unknown_user(admin_client):
    assert admin_client.delete('/api/users/nobody').status_code == 404
