"""
Management commands for seeding and stock maintenance
"""
import logging
from decimal import Decimal

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import Product, RawMaterial, Recipe, RecipeIngredient
from .services.inventory_service import RawMaterialService
from .services.stock_report import export_filename, write_stock_csv
from .utils.error_messages import ErrorMessages as EM

logger = logging.getLogger(__name__)

DEMO_MATERIALS = (
    ('Flour', 'kg', '25', '5'),
    ('Sugar', 'kg', '10', '3'),
    ('Butter', 'kg', '6', '2'),
    ('Eggs', 'pcs', '120', '30'),
)

DEMO_PRODUCTS = (
    ('Butter Cookies', 'Bakery', '180.00', 45, (('Flour', '0.25'), ('Sugar', '0.1'), ('Butter', '0.15'))),
    ('Sponge Cake', 'Bakery', '450.00', 90, (('Flour', '0.4'), ('Sugar', '0.3'), ('Eggs', '6'))),
)


@click.command('seed-demo')
@with_appcontext
def seed_demo_command():
    """Seed sample products, raw materials and recipes (skips existing names)"""
    materials = {}
    created = 0
    for name, unit, stock, reorder in DEMO_MATERIALS:
        material = RawMaterial.query.filter_by(name=name).first()
        if material is None:
            material = RawMaterial(
                name=name, unit=unit, stock_quantity=Decimal(stock), reorder_level=Decimal(reorder)
            )
            db.session.add(material)
            created += 1
        materials[name] = material
    db.session.flush()

    for name, category, price, minutes, lines in DEMO_PRODUCTS:
        if Product.query.filter_by(name=name).first() is not None:
            continue
        product = Product(name=name, category=category, price=Decimal(price))
        recipe = Recipe(product=product, yield_quantity=1, time_required_mins=minutes)
        recipe.ingredients = [
            RecipeIngredient(raw_material=materials[material_name], quantity=Decimal(quantity))
            for material_name, quantity in lines
        ]
        db.session.add(product)
        db.session.add(recipe)
        created += 1

    db.session.commit()
    click.echo(f"Seeded {created} demo records.")


@click.command('export-stock')
@click.argument('path', required=False, type=click.Path(dir_okay=False, writable=True))
@with_appcontext
def export_stock_command(path):
    """Write the raw-material stock sheet as CSV"""
    path = path or export_filename()
    try:
        with open(path, 'w', newline='', encoding='utf-8') as handle:
            rows = write_stock_csv(handle)
    except OSError as exc:
        logger.error("Stock export to %s failed: %s", path, exc)
        raise click.ClickException(EM.EXPORT_WRITE_FAILED.format(reason=exc.strerror or exc)) from exc
    click.echo(f"Exported {rows} raw materials to {path}")


@click.command('low-stock')
@with_appcontext
def low_stock_command():
    """List raw materials at or below their reorder level"""
    materials = RawMaterialService.list_low_stock()
    if not materials:
        click.echo("All raw materials are above their reorder level.")
        return
    for material in materials:
        click.echo(
            f"{material.name}: {material.stock_quantity} {material.unit} "
            f"(reorder at {material.reorder_level})"
        )
    click.echo(f"{len(materials)} raw materials need reordering.")


def register_commands(app):
    """Register CLI commands"""
    app.cli.add_command(seed_demo_command)
    app.cli.add_command(export_stock_command)
    app.cli.add_command(low_stock_command)
