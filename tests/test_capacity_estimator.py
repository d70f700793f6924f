from decimal import Decimal

import pytest

from kitchenops.services.production_planning import (
    IngredientStock,
    InvalidInputError,
    InvalidRecipeError,
    estimate,
)


def _line(required, available, name='item', material_id=None, unit='kg'):
    return {
        'material_id': material_id,
        'name': name,
        'unit': unit,
        'required_per_unit': required,
        'available_stock': available,
    }


def test_limiting_ingredient_is_the_one_with_fewest_units():
    result = estimate([_line(2, 10, 'flour', 1), _line(3, 9, 'sugar', 2)])

    assert [item.possible_units for item in result.per_ingredient] == [5, 3]
    assert result.max_producible == 3
    assert result.limiting.name == 'sugar'
    assert result.limiting_index == 1


def test_zero_stock_gives_zero_units_and_insufficient():
    result = estimate([_line(1, 0)])

    assert result.max_producible == 0
    assert result.per_ingredient[0].sufficient is False


def test_tie_reports_first_ingredient_in_input_order():
    result = estimate([_line(2, 10, 'first'), _line(5, 25, 'second')])

    assert result.max_producible == 5
    assert result.limiting.name == 'first'
    assert result.limiting_index == 0


def test_empty_ingredient_list_is_invalid_recipe():
    with pytest.raises(InvalidRecipeError):
        estimate([])


def test_none_ingredient_list_is_invalid_recipe():
    with pytest.raises(InvalidRecipeError):
        estimate(None)


@pytest.mark.parametrize('ingredients', [5, 'abc', {'required': 1, 'available': 2}])
def test_non_list_ingredients_are_invalid_input(ingredients):
    with pytest.raises(InvalidInputError) as excinfo:
        estimate(ingredients)
    assert excinfo.value.field == 'ingredients'


@pytest.mark.parametrize('required', [0, -1, '-0.5'])
def test_non_positive_requirement_is_rejected(required):
    with pytest.raises(InvalidInputError) as exc:
        estimate([_line(1, 5), _line(required, 5)])
    assert exc.value.field == 'required_per_unit'
    assert exc.value.index == 1


def test_negative_stock_is_rejected():
    with pytest.raises(InvalidInputError) as exc:
        estimate([_line(1, -3)])
    assert exc.value.field == 'available_stock'


@pytest.mark.parametrize('value', ['abc', None, True, float('nan'), float('inf'), object()])
def test_non_numeric_values_are_rejected(value):
    with pytest.raises(InvalidInputError):
        estimate([_line(value, 5)])


def test_floor_division_uses_decimal_precision():
    # 0.3 / 0.1 is 2.9999... in binary floating point
    result = estimate([_line(0.1, 0.3)])
    assert result.max_producible == 3


def test_fractional_requirements_round_down():
    result = estimate([_line('0.75', '2.9')])
    assert result.max_producible == 3
    assert result.per_ingredient[0].sufficient is True


def test_per_ingredient_preserves_input_order():
    names = ['eggs', 'butter', 'flour', 'sugar']
    result = estimate([_line(1, 10 + i, name) for i, name in enumerate(names)])
    assert [item.name for item in result.per_ingredient] == names


def test_estimate_is_deterministic():
    lines = [_line(2, 10, 'a'), _line(5, 25, 'b'), _line(1, 7, 'c')]
    assert estimate(lines).to_dict() == estimate(lines).to_dict()


def test_short_field_aliases_are_accepted():
    result = estimate([{'name': 'salt', 'required': 2, 'available': 9}])
    assert result.max_producible == 4


def test_accepts_ingredient_stock_records():
    result = estimate([IngredientStock(7, 'milk', 'l', Decimal('1.5'), Decimal('6'))])
    assert result.max_producible == 4
    assert result.limiting.material_id == 7


def test_to_dict_shape():
    data = estimate([_line(2, 10, 'flour', 1, 'kg'), _line(3, 9, 'sugar', 2, 'kg')]).to_dict()

    assert data['max_producible'] == 3
    assert data['limiting'] == {
        'material_id': 2,
        'name': 'sugar',
        'unit': 'kg',
        'required_per_unit': 3.0,
        'available_stock': 9.0,
        'possible_units': 3,
        'sufficient': True,
    }
    assert len(data['per_ingredient']) == 2


def test_max_producible_matches_min_floor_property():
    cases = [
        [(1, 0), (2, 2)],
        [(0.5, 7.25), (3, 100), (12, 12)],
        [(4, 3.999), (1, 1000)],
    ]
    for case in cases:
        result = estimate([_line(r, a) for r, a in case])
        expected = min(int(Decimal(str(a)) // Decimal(str(r))) for r, a in case)
        assert result.max_producible == expected
        assert result.max_producible >= 0
