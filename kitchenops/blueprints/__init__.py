"""HTTP blueprints, one package per area; see kitchenops.blueprints_registry."""
