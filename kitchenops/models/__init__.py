"""Models package - imports all models for the application"""
from ..extensions import db

from .catalog import Product
from .inventory import RawMaterial
from .recipe import Recipe, RecipeIngredient
from .production import ProductionLog, ProductionLogMaterial
from .loss import LossLog
from .parties import Client, Vendor
from .orders import Order, OrderItem, ORDER_STATUSES
from .receiving import GoodsReceipt, GoodsReceiptItem, Discrepancy, GRN_STATUSES, DISCREPANCY_TYPES
from .transport import TransportLog, TransportDelivery, DELIVERY_STATUSES

__all__ = [
    'db',
    'Product',
    'RawMaterial',
    'Recipe',
    'RecipeIngredient',
    'ProductionLog',
    'ProductionLogMaterial',
    'LossLog',
    'Client',
    'Vendor',
    'Order',
    'OrderItem',
    'ORDER_STATUSES',
    'GoodsReceipt',
    'GoodsReceiptItem',
    'Discrepancy',
    'GRN_STATUSES',
    'DISCREPANCY_TYPES',
    'TransportLog',
    'TransportDelivery',
    'DELIVERY_STATUSES',
]
