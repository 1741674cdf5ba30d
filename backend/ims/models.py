# Overview: Entity enumerations and defaults shared by the inventory views.

"""
Shapes exchanged with the remote inventory API.

Records travel as plain dicts (JSON-native). After normalization every record
carries an "id" key; see services/normalizer.py for the canonical fields.

Category ("folder"): id, name, description, productCount?, totalRemainingStock?
Product ("box"):     id, name, sku, category, categoryName, totalStock, sold,
                     returned, stock, price, status
Sale:                id, saleId, customerName, totalAmount, status
"""

# Server-assigned; never recomputed here
PRODUCT_STATUS_IN_STOCK = "In Stock"
PRODUCT_STATUS_LOW_STOCK = "Low Stock"
PRODUCT_STATUS_OUT_OF_STOCK = "Out of Stock"
PRODUCT_STATUSES = (
    PRODUCT_STATUS_IN_STOCK,
    PRODUCT_STATUS_LOW_STOCK,
    PRODUCT_STATUS_OUT_OF_STOCK,
)

# Any status may follow any other
SALE_STATUSES = ("Pending", "Processing", "Shipped", "Completed", "Cancelled")

# Box list filters
STATUS_FILTER_ALL = "all"
STATUS_FILTER_IN_STOCK = "inStock"
STATUS_FILTER_SOLD = "sold"
STATUS_FILTER_RETURNED = "returned"
STATUS_FILTERS = (
    STATUS_FILTER_ALL,
    STATUS_FILTER_IN_STOCK,
    STATUS_FILTER_SOLD,
    STATUS_FILTER_RETURNED,
)

CATEGORY_FILTER_ALL = "all"

DEFAULT_FOLDER_DESCRIPTION = "Configure folders"

MIN_PIN_LENGTH = 4
MAX_PIN_LENGTH = 6
