from decimal import Decimal

import pytest

from kitchenops.services.production_planning import (
    InsufficientStockError,
    InvalidInputError,
    InvalidRecipeError,
    apply_production,
    estimate,
)


def _line(material_id, required, available, name=None):
    return {
        'material_id': material_id,
        'name': name or f'material-{material_id}',
        'unit': 'kg',
        'required_per_unit': required,
        'available_stock': available,
    }


def test_deducts_required_times_quantity():
    deductions = apply_production([{'required': 2, 'available': 10}], 4)

    assert len(deductions) == 1
    assert deductions[0].used_quantity == Decimal('8')
    assert deductions[0].new_stock == Decimal('2')


def test_insufficient_stock_fails_whole_batch():
    with pytest.raises(InsufficientStockError) as exc:
        apply_production([{'name': 'flour', 'required': 2, 'available': 10}], 6)

    shortage = exc.value.shortages[0]
    assert shortage['material'] == 'flour'
    assert shortage['required'] == 12.0
    assert shortage['available'] == 10.0
    assert exc.value.status_code == 409


def test_every_failing_ingredient_is_reported():
    lines = [_line(1, 1, 100), _line(2, 5, 10, 'sugar'), _line(3, 3, 5, 'butter')]

    with pytest.raises(InsufficientStockError) as exc:
        apply_production(lines, 3)

    assert [s['material'] for s in exc.value.shortages] == ['sugar', 'butter']
    assert exc.value.material == 'sugar'
    assert 'Insufficient stock for sugar. Required: 15.0 kg, Available: 10.0 kg' in exc.value.message


def test_exact_stock_is_enough():
    deductions = apply_production([_line(1, '0.25', '1')], 4)
    assert deductions[0].new_stock == Decimal('0')


def test_deductions_preserve_input_order_and_ids():
    lines = [_line(9, 1, 5), _line(4, 2, 8), _line(6, '0.5', 3)]
    deductions = apply_production(lines, 2)
    assert [d.material_id for d in deductions] == [9, 4, 6]
    assert [d.new_stock for d in deductions] == [Decimal('3'), Decimal('4'), Decimal('2.0')]


def test_decimal_arithmetic_has_no_float_drift():
    deductions = apply_production([_line(1, 0.1, 1)], 3)
    assert deductions[0].used_quantity == Decimal('0.3')
    assert deductions[0].new_stock == Decimal('0.7')


@pytest.mark.parametrize('quantity', [0, -2, 1.5, '2.5', None, True, 'ten'])
def test_quantity_must_be_a_positive_whole_number(quantity):
    with pytest.raises(InvalidInputError) as exc:
        apply_production([_line(1, 1, 10)], quantity)
    assert exc.value.field == 'quantity_produced'


def test_whole_number_strings_and_decimals_are_accepted():
    assert apply_production([_line(1, 1, 10)], '3')[0].new_stock == Decimal('7')
    assert apply_production([_line(1, 1, 10)], Decimal('2.0'))[0].new_stock == Decimal('8')


def test_empty_recipe_is_rejected_before_quantity_math():
    with pytest.raises(InvalidRecipeError):
        apply_production([], 1)


def test_re_estimate_after_deduction_drops_by_quantity():
    lines = [_line(1, 2, 20), _line(2, 3, 33), _line(3, '0.5', 9)]
    before = estimate(lines).max_producible
    quantity = 4

    deductions = apply_production(lines, quantity)
    after_lines = [
        {**line, 'available_stock': deduction.new_stock}
        for line, deduction in zip(lines, deductions)
    ]

    assert estimate(after_lines).max_producible == before - quantity


def test_to_dict_returns_floats():
    data = apply_production([_line(5, '1.5', 10)], 2)[0].to_dict()
    assert data == {'material_id': 5, 'used_quantity': 3.0, 'new_stock': 7.0}


def test_error_payload_is_serializable():
    with pytest.raises(InsufficientStockError) as exc:
        apply_production([_line(1, 5, 1, 'cocoa')], 1)
    payload = exc.value.to_dict()
    assert payload['error_code'] == 'insufficient_stock'
    assert payload['shortages'][0]['material_id'] == 1
