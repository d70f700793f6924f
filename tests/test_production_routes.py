from decimal import Decimal

from kitchenops.extensions import db
from kitchenops.models import ProductionLog, RawMaterial


def test_log_production_endpoint(client, make_material, make_recipe):
    flour = make_material('Flour', stock='10')
    recipe = make_recipe([(flour, 2)], time_required_mins=60)

    response = client.post('/api/production', json={
        'recipe_id': recipe.id,
        'quantity': 4,
        'time_spent_mins': 120,
        'operator_notes': 'batch A',
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['quantity'] == 4
    assert body['data']['production_cost'] == '30.00'
    assert body['data']['efficiency_pct'] == 50
    assert body['data']['materials'][0]['quantity_used'] == 8.0
    assert Decimal(str(db.session.get(RawMaterial, flour.id).stock_quantity)) == Decimal('2')


def test_log_production_insufficient_stock_is_conflict(client, make_material, make_recipe):
    flour = make_material('Flour', stock='10')
    recipe = make_recipe([(flour, 2)])

    response = client.post('/api/production', json={'recipe_id': recipe.id, 'quantity': 6})

    assert response.status_code == 409
    body = response.get_json()
    assert body['success'] is False
    assert body['errors']['error_code'] == 'insufficient_stock'
    assert body['errors']['shortages'] == [{
        'material_id': flour.id,
        'material': 'Flour',
        'unit': 'kg',
        'required': 12.0,
        'available': 10.0,
    }]
    assert ProductionLog.query.count() == 0


def test_log_production_validates_payload(client, make_material, make_recipe):
    recipe = make_recipe([(make_material(), 1)])

    response = client.post('/api/production', json={'recipe_id': recipe.id, 'quantity': 0})
    assert response.status_code == 422
    assert 'quantity' in response.get_json()['errors']

    response = client.post('/api/production', json={'quantity': 1})
    assert response.status_code == 422
    assert 'recipe_id' in response.get_json()['errors']


def test_log_production_unknown_recipe(client, app_context):
    response = client.post('/api/production', json={'recipe_id': 42, 'quantity': 1})
    assert response.status_code == 404


def test_list_and_get_production_logs(client, make_material, make_recipe):
    recipe = make_recipe([(make_material(stock='20'), 1)])
    created = client.post('/api/production', json={'recipe_id': recipe.id, 'quantity': 2}).get_json()['data']

    listing = client.get('/api/production').get_json()['data']
    assert [entry['id'] for entry in listing] == [created['id']]
    assert listing[0]['product_name'] == 'Cookies'

    detail = client.get(f"/api/production/{created['id']}")
    assert detail.status_code == 200
    assert detail.get_json()['data']['quantity'] == 2


def test_recipe_estimate_endpoint(client, make_material, make_recipe):
    flour = make_material('Flour', stock='10')
    sugar = make_material('Sugar', stock='9')
    recipe = make_recipe([(flour, 2), (sugar, 3)], time_required_mins=120)

    response = client.get(f'/api/recipes/{recipe.id}/estimate')

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['max_producible'] == 3
    assert data['limiting']['name'] == 'Sugar'
    assert data['estimated_hours'] == 6
    assert [item['possible_units'] for item in data['per_ingredient']] == [5, 3]


def test_recipe_estimate_without_ingredients_is_unprocessable(client, make_recipe):
    recipe = make_recipe([])
    response = client.get(f'/api/recipes/{recipe.id}/estimate')
    assert response.status_code == 422
    assert response.get_json()['errors']['error_code'] == 'invalid_recipe'


def test_adhoc_estimate_and_check(client, app_context):
    estimate = client.post('/api/production/estimate', json={'ingredients': [
        {'name': 'a', 'required': 2, 'available': 10},
        {'name': 'b', 'required': 5, 'available': 25},
    ]}).get_json()['data']
    assert estimate['max_producible'] == 5
    assert estimate['limiting_index'] == 0

    check = client.post('/api/production/check', json={
        'ingredients': [{'material_id': 1, 'required': 2, 'available': 10}],
        'quantity_produced': 4,
    })
    assert check.status_code == 200
    assert check.get_json()['data'] == [{'material_id': 1, 'used_quantity': 8.0, 'new_stock': 2.0}]

    empty = client.post('/api/production/estimate', json={'ingredients': []})
    assert empty.status_code == 422


def test_adhoc_routes_reject_malformed_ingredients(client, app_context):
    for bad in (5, 'abc', {'required': 1, 'available': 2}):
        for path, extra in (('/api/production/estimate', {}), ('/api/production/check', {'quantity_produced': 1})):
            response = client.post(path, json={'ingredients': bad, **extra})
            assert response.status_code == 422
            assert 'ingredients' in response.get_json()['errors']


def test_adhoc_routes_require_ingredients(client, app_context):
    for body in ({}, {'ingredients': None}):
        response = client.post('/api/production/estimate', json=body)
        assert response.status_code == 422
        assert response.get_json()['errors'] == {'ingredients': ['ingredients is required']}

    empty = client.post('/api/production/check', json={'ingredients': [], 'quantity_produced': 1})
    assert empty.status_code == 422
    assert empty.get_json()['errors']['error_code'] == 'invalid_recipe'


def test_production_log_reports_rate_and_rounds_efficiency_half_up(client, make_material, make_recipe):
    recipe = make_recipe([(make_material(stock='50'), 1)], time_required_mins=1)

    response = client.post('/api/production', json={'recipe_id': recipe.id, 'quantity': 7, 'time_spent_mins': 8})

    data = response.get_json()['data']
    # 1 / 8 = 12.5%
    assert data['efficiency_pct'] == 13
    # 7 units in 8 minutes = 52.5 per hour
    assert data['units_per_hour'] == 52.5

    untimed = client.post('/api/production', json={'recipe_id': recipe.id, 'quantity': 1}).get_json()['data']
    assert untimed['units_per_hour'] is None
