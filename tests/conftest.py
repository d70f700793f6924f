"""
Pytest configuration and shared fixtures for KitchenOps tests.
"""
import os
import tempfile
from decimal import Decimal

import pytest

from kitchenops import create_app
from kitchenops.extensions import db
from kitchenops.models import Client, Product, RawMaterial, Recipe, RecipeIngredient, Vendor


@pytest.fixture(scope='function')
def app():
    """Create and configure a new app instance for each test."""
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    app = create_app({
        'TESTING': True,
        'DATABASE_URL': f'sqlite:///{db_path}',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'SECRET_KEY': 'test-secret-key',
        'CACHE_TYPE': 'SimpleCache',
        'DASHBOARD_CACHE_TTL': 60,
        'PRODUCTION_HOURLY_RATE': '15',
        'BUSINESS_TIMEZONE': 'Asia/Kolkata',
    })

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()

    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def app_context(app):
    """Provide an application context for tests that need it."""
    with app.app_context():
        yield


@pytest.fixture
def make_material(app_context):
    def _make(name='Flour', unit='kg', stock='10', reorder='2'):
        material = RawMaterial(
            name=name, unit=unit, stock_quantity=Decimal(str(stock)), reorder_level=Decimal(str(reorder))
        )
        db.session.add(material)
        db.session.commit()
        return material
    return _make


@pytest.fixture
def make_product(app_context):
    def _make(name='Cookies', category='Bakery', price='120.00'):
        product = Product(name=name, category=category, price=Decimal(price))
        db.session.add(product)
        db.session.commit()
        return product
    return _make


@pytest.fixture
def make_recipe(app_context, make_product):
    """Recipe factory: lines are (material, quantity per unit) pairs."""
    def _make(lines, product=None, time_required_mins=60, yield_quantity=1):
        product = product or make_product()
        recipe = Recipe(product=product, time_required_mins=time_required_mins, yield_quantity=yield_quantity)
        recipe.ingredients = [
            RecipeIngredient(raw_material=material, quantity=Decimal(str(quantity)))
            for material, quantity in lines
        ]
        db.session.add(recipe)
        db.session.commit()
        return recipe
    return _make


@pytest.fixture
def make_client(app_context):
    def _make(name='Cafe Mocha', address='12 MG Road'):
        client = Client(name=name, address=address, email='orders@cafemocha.example')
        db.session.add(client)
        db.session.commit()
        return client
    return _make


@pytest.fixture
def make_vendor(app_context):
    def _make(name='Fresh Mills Pvt Ltd'):
        vendor = Vendor(name=name, contact='9876500000')
        db.session.add(vendor)
        db.session.commit()
        return vendor
    return _make
