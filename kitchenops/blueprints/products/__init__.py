from flask import Blueprint

products_bp = Blueprint('products', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
