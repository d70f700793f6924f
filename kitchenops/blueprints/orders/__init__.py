from flask import Blueprint

orders_bp = Blueprint('orders', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
