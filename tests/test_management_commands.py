import csv

from kitchenops.models import Product, RawMaterial, Recipe


def test_seed_demo_is_repeatable(app, runner):
    first = runner.invoke(args=['seed-demo'])
    assert first.exit_code == 0
    assert 'Seeded 6 demo records.' in first.output

    second = runner.invoke(args=['seed-demo'])
    assert 'Seeded 0 demo records.' in second.output

    with app.app_context():
        assert RawMaterial.query.count() == 4
        assert Product.query.count() == 2
        assert Recipe.query.count() == 2


def test_low_stock_command(runner, make_material):
    make_material('Flour', stock='10', reorder='2')
    assert 'All raw materials are above their reorder level.' in runner.invoke(args=['low-stock']).output

    make_material('Yeast', unit='g', stock='50', reorder='100')
    result = runner.invoke(args=['low-stock'])
    assert result.exit_code == 0
    assert 'Yeast: 50' in result.output
    assert '1 raw materials need reordering.' in result.output


def test_export_stock_writes_csv(runner, make_material, tmp_path):
    make_material('Flour', stock='12.5', reorder='2')
    make_material('Butter', stock='1', reorder='2')
    target = tmp_path / 'stock.csv'

    result = runner.invoke(args=['export-stock', str(target)])

    assert result.exit_code == 0
    assert 'Exported 2 raw materials' in result.output
    with open(target, newline='', encoding='utf-8') as handle:
        rows = list(csv.reader(handle))
    assert rows == [
        ['Name', 'Stock Quantity', 'Unit', 'Reorder Level', 'Status'],
        ['Butter', '1', 'kg', '2', 'Low Stock'],
        ['Flour', '12.5', 'kg', '2', 'In Stock'],
    ]


def test_export_stock_reports_unwritable_path(runner, make_material, tmp_path):
    make_material('Flour')
    result = runner.invoke(args=['export-stock', str(tmp_path / 'missing' / 'stock.csv')])
    assert result.exit_code == 1
    assert 'Could not write export file' in result.output
