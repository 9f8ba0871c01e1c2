# Importing every model registers its table on Base.metadata

from shopdesk.models.customers import Customer
from shopdesk.models.orders import Order
from shopdesk.models.order_details import OrderDetail
from shopdesk.models.inventory import InventoryEntry
from shopdesk.models.sales import Sale
from shopdesk.models.sale_items import SaleItem

__all__ = [
    "Customer",
    "Order",
    "OrderDetail",
    "InventoryEntry",
    "Sale",
    "SaleItem",
]
