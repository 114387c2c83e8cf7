from datetime import datetime, timedelta

import pytest

from app.models import db, User, Product, ForumPost
from app.utils.analytics import calculate_growth, resolve_windows, build_analytics
from app.utils.errors import ValidationError


@pytest.mark.parametrize('current, previous, expected', [
    (5, 0, 100),
    (0, 0, 0),
    (3, 2, 50),
    (1, 4, -75),
    (2, 3, -33),
    (17, 8, 113),
    (1, 8, -87),
])
def test_calculate_growth(current, previous, expected):
    assert calculate_growth(current, previous) == expected


def test_windows_are_adjacent():
    now = datetime(2024, 3, 31, 12, 0)
    previous_start, start, end = resolve_windows('month', now)
    assert end - start == timedelta(days=30)
    assert start - previous_start == timedelta(days=30)
    assert end == now


def test_unknown_range_rejected():
    with pytest.raises(ValidationError):
        resolve_windows('decade')


def test_analytics_counts_both_windows(app, make_user):
    now = datetime.utcnow()
    farmer_id = make_user('farmer@example.com')

    with app.app_context():
        farmer = db.session.get(User, farmer_id)
        farmer.created_at = now - timedelta(days=10)
        farmer.last_active = now - timedelta(days=1)
        db.session.add_all([
            Product(farmer_id=farmer_id, name='A', price=1, city='X', quantity=1, unit='kg',
                    category='Fruits', created_at=now - timedelta(days=2)),
            Product(farmer_id=farmer_id, name='B', price=1, city='X', quantity=1, unit='kg',
                    created_at=now - timedelta(days=3)),
            Product(farmer_id=farmer_id, name='C', price=1, city='X', quantity=1, unit='kg',
                    category='Fruits', created_at=now - timedelta(days=9)),
            ForumPost(author_id=farmer_id, title='Old', content='x', created_at=now - timedelta(days=8)),
        ])
        db.session.commit()

        result = build_analytics('week', now=now)

    summary = result['summary']
    assert summary['totalUsers'] == 1
    assert summary['totalProducts'] == 3
    assert summary['newUsers'] == 0
    assert summary['userGrowth'] == -100
    assert summary['newProducts'] == 2
    assert summary['productGrowth'] == 100
    assert summary['newPosts'] == 0
    assert summary['postGrowth'] == -100
    assert summary['activeUsers'] == 1
    assert summary['activeUserGrowth'] == 100

    categories = dict(zip(result['productCategories']['labels'], result['productCategories']['counts']))
    assert categories == {'Fruits': 2, 'Uncategorized': 1}

    activity = result['userActivity']
    assert sum(activity['activeUsers']) == 1
    assert sum(activity['newUsers']) == 0
    assert len(activity['labels']) == len(activity['activeUsers'])


def test_analytics_endpoint(admin_client, farmer_client):
    farmer_client.post('/api/forum/posts', json={'title': 'Hi', 'content': 'there'})

    resp = admin_client.get('/api/admin/analytics')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['range'] == 'week'
    assert body['summary']['newUsers'] == 2
    assert body['summary']['userGrowth'] == 100
    assert sum(body['forumActivity']['posts']) == 1

    assert admin_client.get('/api/admin/analytics?range=year').get_json()['range'] == 'year'
    assert admin_client.get('/api/admin/analytics?range=fortnight').status_code == 400
