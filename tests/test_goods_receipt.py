from datetime import date
from decimal import Decimal

import pytest

from kitchenops.extensions import db
from kitchenops.models import Discrepancy, GoodsReceipt, RawMaterial
from kitchenops.services.errors import ConflictError, ValidationError
from kitchenops.services.grn_service import GoodsReceiptService


def _grn_payload(vendor, *items, grn_date='2026-03-05', **extra):
    return {
        'vendor_id': vendor.id,
        'grn_date': grn_date,
        'items': [
            {'raw_material_id': m.id, 'expected_quantity': e, 'received_quantity': r, 'unit_price': p}
            for m, e, r, p in items
        ],
        **extra,
    }


def test_grn_numbers_are_sequential_per_day(make_vendor, make_material):
    vendor = make_vendor()
    flour = make_material('Flour')
    day = date(2026, 3, 5)

    assert GoodsReceiptService.generate_grn_number(day) == 'GRN-20260305-0001'
    first = GoodsReceiptService.create_grn(_grn_payload(vendor, (flour, 5, 5, 40)))
    second = GoodsReceiptService.create_grn(_grn_payload(vendor, (flour, 5, 5, 40)))
    other_day = GoodsReceiptService.create_grn(_grn_payload(vendor, (flour, 5, 5, 40), grn_date='2026-03-06'))

    assert first.grn_number == 'GRN-20260305-0001'
    assert second.grn_number == 'GRN-20260305-0002'
    assert other_day.grn_number == 'GRN-20260306-0001'
    assert GoodsReceiptService.generate_grn_number(day) == 'GRN-20260305-0003'


def test_create_grn_totals_and_discrepancies(make_vendor, make_material):
    vendor = make_vendor()
    flour = make_material('Flour', stock='10')
    sugar = make_material('Sugar', stock='3')
    salt = make_material('Salt', stock='1')

    grn = GoodsReceiptService.create_grn(_grn_payload(
        vendor,
        (flour, 50, 45, '42.50'),
        (sugar, 20, 22, 38),
        (salt, 5, 5, 20),
    ))

    assert grn.status == 'pending'
    assert grn.total_amount == Decimal('2848.50')
    found = {(d.raw_material_id, d.discrepancy_type, Decimal(str(d.discrepancy_quantity))) for d in grn.discrepancies}
    assert found == {(flour.id, 'shortage', Decimal('5')), (sugar.id, 'excess', Decimal('2'))}
    # pending receipts do not change stock
    assert Decimal(str(db.session.get(RawMaterial, flour.id).stock_quantity)) == Decimal('10')


def test_detect_discrepancies_is_idempotent(make_vendor, make_material):
    vendor = make_vendor()
    flour = make_material('Flour')
    grn = GoodsReceiptService.create_grn(_grn_payload(vendor, (flour, 10, 8, 1)))

    GoodsReceiptService.refresh_discrepancies(grn.id)
    GoodsReceiptService.refresh_discrepancies(grn.id)

    assert Discrepancy.query.filter_by(grn_id=grn.id).count() == 1


def test_receive_grn_credits_stock_once(make_vendor, make_material):
    vendor = make_vendor()
    flour = make_material('Flour', stock='10')
    grn = GoodsReceiptService.create_grn(_grn_payload(vendor, (flour, 50, 45, 40)))

    received = GoodsReceiptService.receive_grn(grn.id)

    assert received.status == 'received'
    assert received.received_at is not None
    assert Decimal(str(db.session.get(RawMaterial, flour.id).stock_quantity)) == Decimal('55')

    with pytest.raises(ConflictError):
        GoodsReceiptService.receive_grn(grn.id)
    assert Decimal(str(db.session.get(RawMaterial, flour.id).stock_quantity)) == Decimal('55')


def test_grn_created_as_received_credits_stock(make_vendor, make_material):
    vendor = make_vendor()
    sugar = make_material('Sugar', stock='1')
    GoodsReceiptService.create_grn(_grn_payload(vendor, (sugar, 4, 4, 30), status='received'))
    assert Decimal(str(db.session.get(RawMaterial, sugar.id).stock_quantity)) == Decimal('5')


def test_create_grn_requires_vendor_and_items(make_vendor, make_material):
    vendor = make_vendor()
    with pytest.raises(ValidationError):
        GoodsReceiptService.create_grn({'vendor_id': vendor.id, 'items': []})
    with pytest.raises(ValidationError):
        GoodsReceiptService.create_grn({'vendor_id': 999, 'items': [{'raw_material_id': make_material().id}]})
    with pytest.raises(ValidationError) as excinfo:
        GoodsReceiptService.create_grn(_grn_payload(vendor, (make_material('Rice'), '5', '4.9999', '10')))
    assert 'received_quantity' in excinfo.value.errors
    assert GoodsReceipt.query.count() == 0


def test_discrepancy_report_filters_and_stats(client, make_vendor, make_material):
    mills = make_vendor('Fresh Mills')
    dairy = make_vendor('Dairy Direct')
    flour = make_material('Flour')
    butter = make_material('Butter')

    GoodsReceiptService.create_grn(_grn_payload(mills, (flour, 10, 7, 1), grn_date='2026-02-01'))
    GoodsReceiptService.create_grn(_grn_payload(dairy, (butter, 4, 6, 1), grn_date='2026-02-10'))
    GoodsReceiptService.create_grn(_grn_payload(dairy, (butter, 5, 1, 1), grn_date='2026-02-20'))

    everything = client.get('/api/discrepancies').get_json()['data']
    assert everything['stats'] == {'shortage': 2, 'excess': 1, 'total': 3, 'total_quantity': 9.0}
    assert [row['grn_date'] for row in everything['discrepancies']] == ['2026-02-20', '2026-02-10', '2026-02-01']

    shortages = client.get('/api/discrepancies?type=shortage').get_json()['data']
    assert shortages['stats']['total'] == 2

    dairy_only = client.get('/api/discrepancies?vendor=DAIRY').get_json()['data']
    assert {row['vendor_name'] for row in dairy_only['discrepancies']} == {'Dairy Direct'}

    window = client.get('/api/discrepancies?date_from=2026-02-05&date_to=2026-02-10').get_json()['data']
    assert window['stats'] == {'shortage': 0, 'excess': 1, 'total': 1, 'total_quantity': 2.0}

    bad_type = client.get('/api/discrepancies?type=missing')
    assert bad_type.status_code == 422


def test_grn_endpoints(client, make_vendor, make_material):
    vendor = make_vendor()
    flour = make_material('Flour', stock='0')

    created = client.post('/api/grns', json=_grn_payload(vendor, (flour, 10, 9, '12.5')))
    assert created.status_code == 201
    data = created.get_json()['data']
    assert data['grn_number'] == 'GRN-20260305-0001'
    assert data['total_amount'] == '112.50'
    assert data['discrepancies'][0]['discrepancy_type'] == 'shortage'

    receive = client.post(f"/api/grns/{data['id']}/receive")
    assert receive.status_code == 200
    assert client.post(f"/api/grns/{data['id']}/receive").status_code == 409

    next_number = client.get('/api/grns/next-number?date=2026-03-05').get_json()['data']
    assert next_number == {'grn_number': 'GRN-20260305-0002'}
