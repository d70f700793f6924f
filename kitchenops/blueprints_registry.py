import logging
from importlib import import_module

logger = logging.getLogger(__name__)

# (module path, blueprint attribute, url prefix, description)
BLUEPRINTS = (
    ('kitchenops.blueprints.dashboard', 'dashboard_bp', '/api/dashboard', 'Dashboard'),
    ('kitchenops.blueprints.products', 'products_bp', '/api/products', 'Products'),
    ('kitchenops.blueprints.inventory', 'inventory_bp', '/api/raw-materials', 'Raw Materials'),
    ('kitchenops.blueprints.recipes', 'recipes_bp', '/api/recipes', 'Recipes'),
    ('kitchenops.blueprints.production', 'production_bp', '/api/production', 'Production'),
    ('kitchenops.blueprints.losses', 'losses_bp', '/api/losses', 'Loss Log'),
    ('kitchenops.blueprints.clients', 'clients_bp', '/api/clients', 'Clients'),
    ('kitchenops.blueprints.orders', 'orders_bp', '/api/orders', 'Orders'),
    ('kitchenops.blueprints.vendors', 'vendors_bp', '/api/vendors', 'Vendors'),
    ('kitchenops.blueprints.receiving', 'receiving_bp', '/api/grns', 'Goods Receipt'),
    ('kitchenops.blueprints.receiving', 'discrepancies_bp', '/api/discrepancies', 'Discrepancy Report'),
    ('kitchenops.blueprints.transport', 'transport_bp', '/api/transport', 'Transport Log'),
)


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    registered = []
    for module_path, attribute, url_prefix, description in BLUEPRINTS:
        blueprint = getattr(import_module(module_path), attribute)
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        registered.append(description)

    logger.debug("Registered %s blueprints: %s", len(registered), ", ".join(registered))
    return registered
