from decimal import Decimal

import pytest

from kitchenops.models import Order, OrderItem
from kitchenops.services.client_service import ClientService
from kitchenops.services.errors import ConflictError, ValidationError
from kitchenops.services.grn_service import GoodsReceiptService
from kitchenops.services.order_service import OrderService
from kitchenops.services.vendor_service import VendorService


def test_order_totals_use_item_prices_and_product_defaults(make_client, make_product):
    cafe = make_client()
    cookies = make_product('Cookies', price='120.00')
    bread = make_product('Bread', price='45.50')

    order = OrderService.create_order({
        'client_id': cafe.id,
        'order_date': '2026-04-01',
        'items': [
            {'product_id': cookies.id, 'quantity': 3, 'unit_price': '110'},
            {'product_id': bread.id, 'quantity': 2},
        ],
    })

    assert order.status == 'pending'
    prices = sorted(Decimal(str(item.unit_price)) for item in order.items)
    assert prices == [Decimal('45.50'), Decimal('110.00')]
    assert Decimal(str(order.total_amount)) == Decimal('421.00')


def test_order_validation(make_client, make_product):
    cafe = make_client()
    cookies = make_product()
    with pytest.raises(ValidationError) as excinfo:
        OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 0}]})
    assert 'quantity' in excinfo.value.errors
    with pytest.raises(ValidationError):
        OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': 999, 'quantity': 1}]})
    with pytest.raises(ValidationError):
        OrderService.create_order({'client_id': 999, 'items': [{'product_id': cookies.id, 'quantity': 1}]})
    assert Order.query.count() == 0


def test_update_order_replaces_items(make_client, make_product):
    cafe = make_client()
    cookies = make_product('Cookies', price='100')
    cake = make_product('Cake', price='500')
    order = OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 2}]})

    updated = OrderService.update_order(order.id, {'items': [{'product_id': cake.id, 'quantity': 1}]})

    assert [item.product_id for item in updated.items] == [cake.id]
    assert Decimal(str(updated.total_amount)) == Decimal('500.00')
    assert OrderItem.query.count() == 1


def test_order_status_endpoint_and_filter(client, make_client, make_product):
    cafe = make_client()
    cookies = make_product()
    first = OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 1}]})
    OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 1}]})

    response = client.post(f'/api/orders/{first.id}/status', json={'status': 'Completed'})
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'completed'

    completed = client.get('/api/orders?status=completed').get_json()['data']
    assert [row['id'] for row in completed] == [first.id]

    bad = client.post(f'/api/orders/{first.id}/status', json={'status': 'lost'})
    assert bad.status_code == 422
    assert OrderService.get_order(first.id).status == 'completed'

    assert client.get('/api/orders?status=lost').status_code == 422


def test_client_stats_and_delete_guard(client, make_client, make_product):
    cafe = make_client('Cafe Mocha')
    idle = make_client('Idle Bistro')
    cookies = make_product(price='100')
    OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 2}]})
    OrderService.create_order({'client_id': cafe.id, 'items': [{'product_id': cookies.id, 'quantity': 1}]})

    rows = {row['name']: row for row in client.get('/api/clients').get_json()['data']}
    assert rows['Cafe Mocha']['total_orders'] == 2
    assert rows['Cafe Mocha']['total_revenue'] == '300.00'
    assert rows['Idle Bistro']['total_orders'] == 0
    assert rows['Idle Bistro']['total_revenue'] == '0.00'

    with pytest.raises(ConflictError):
        ClientService.delete_client(cafe.id)
    assert client.delete(f'/api/clients/{idle.id}').status_code == 200
    assert client.get(f'/api/clients/{idle.id}').status_code == 404


def test_client_requires_name(client):
    response = client.post('/api/clients', json={'email': 'orders@example.com'})
    assert response.status_code == 422
    assert 'name' in response.get_json()['errors']


def test_vendor_stats_and_delete_guard(client, make_vendor, make_material):
    mills = make_vendor('Fresh Mills')
    spare = make_vendor('Spare Supplies')
    flour = make_material('Flour')
    sugar = make_material('Sugar')
    GoodsReceiptService.create_grn({
        'vendor_id': mills.id,
        'items': [
            {'raw_material_id': flour.id, 'expected_quantity': 10, 'received_quantity': 10, 'unit_price': 40},
            {'raw_material_id': sugar.id, 'expected_quantity': 5, 'received_quantity': 5, 'unit_price': 30},
        ],
    })
    GoodsReceiptService.create_grn({
        'vendor_id': mills.id,
        'items': [{'raw_material_id': flour.id, 'expected_quantity': 2, 'received_quantity': 2, 'unit_price': 40}],
    })

    rows = {row['name']: row for row in client.get('/api/vendors').get_json()['data']}
    assert rows['Fresh Mills']['total_grns'] == 2
    assert rows['Fresh Mills']['total_value'] == '630.00'
    assert rows['Fresh Mills']['materials_supplied'] == 2
    assert rows['Spare Supplies'] == {**rows['Spare Supplies'], 'total_grns': 0, 'materials_supplied': 0}

    with pytest.raises(ConflictError):
        VendorService.delete_vendor(mills.id)
    VendorService.delete_vendor(spare.id)
    assert [vendor.name for vendor in VendorService.list_vendors()] == ['Fresh Mills']
