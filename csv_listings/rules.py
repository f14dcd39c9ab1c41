"""
Deterministic conversion rules.

Alias chains are ordered: the first column present with a non-blank value wins.
Adding a platform means adding a table here and a normalizer entry, not new
control flow in the parser.
"""

EVENT_KIND = 30402
SUMMARY_MAX_CHARS = 280

DEFAULT_CURRENCY = "USD"
DEFAULT_WEIGHT_UNIT = "kg"
DEFAULT_DIMENSION_UNIT = "cm"
ENGLISH_DIMENSION_UNIT = "in"

CSV_DELIMITER = ","
SOURCE_ENCODING = "utf-8-sig"
# stdlib csv caps a single field at 128 KiB; long HTML descriptions exceed it
CSV_FIELD_SIZE_LIMIT = 2**31 - 1

# eBay exports numbered picture columns "Picture URL 1" .. "Picture URL 12"
EBAY_PICTURE_COLUMNS = 12
EBAY_PICTURE_PREFIX = "Picture URL"
EBAY_ENGLISH_SYSTEM = "English"

GRAMS_PER_KG = 1000


WOOCOMMERCE = {
    "id": ["SKU", "sku", "ID"],
    "title": ["Name", "Title", "name"],
    "description": ["Description", "Short description", "description"],
    "price": ["Regular price", "Price", "Sale price", "price"],
    "quantity": ["Stock", "Stock quantity", "stock_quantity"],
    "images": ["Images", "Image URL", "images"],
    "category": ["Categories", "Category", "categories"],
    "weight": ["Weight (kg)", "Weight (lbs)", "Weight (g)", "Weight (oz)", "Weight"],
    "dimensions": ["Dimensions", "dimensions"],
    "length": ["Length (cm)", "Length (in)", "Length (mm)", "Length"],
    "width": ["Width (cm)", "Width (in)", "Width (mm)", "Width"],
    "height": ["Height (cm)", "Height (in)", "Height (mm)", "Height"],
}

# unit implied by the WooCommerce column header that supplied the value
WOOCOMMERCE_WEIGHT_UNITS = {
    "Weight (kg)": "kg",
    "Weight (lbs)": "lbs",
    "Weight (g)": "g",
    "Weight (oz)": "oz",
}
WOOCOMMERCE_DIMENSION_UNITS = {
    "Length (cm)": "cm", "Width (cm)": "cm", "Height (cm)": "cm",
    "Length (in)": "in", "Width (in)": "in", "Height (in)": "in",
    "Length (mm)": "mm", "Width (mm)": "mm", "Height (mm)": "mm",
}
WOOCOMMERCE_IMAGE_SEPARATORS = (",", "|")


EBAY = {
    "id": ["SKU", "Custom Label", "Custom label (SKU)", "CustomLabel", "Item ID", "Item number"],
    "title": ["Title", "*Title"],
    "description": ["Description", "*Description"],
    "price": ["Start Price", "*StartPrice", "StartPrice", "Buy It Now Price", "Price"],
    "currency": ["Currency"],
    "quantity": ["Quantity", "*Quantity", "Available Quantity"],
    "images": ["Picture URL", "PicURL"],
    "category": ["Category Name", "Category name", "Category"],
    "weight": ["Package Weight", "Weight"],
    "weight_unit": ["Weight Unit"],
    "length": ["Package Length", "Length"],
    "width": ["Package Width", "Width"],
    "height": ["Package Height", "Height"],
    "dimension_unit": ["Dimension Unit"],
    "measurement_system": ["Measurement System", "MeasurementSystem"],
}
EBAY_IMAGE_SEPARATORS = ("|",)


SHOPIFY = {
    "id": ["Variant SKU", "Handle", "ID"],
    "title": ["Title"],
    "description": ["Body (HTML)"],
    "price": ["Variant Price"],
    "quantity": ["Variant Inventory Qty"],
    "images": ["Image Src"],
    "category": ["Type", "Product Category"],
    "weight_grams": ["Variant Grams"],
}
SHOPIFY_IMAGE_SEPARATORS = (",",)


AMAZON = {
    "id": ["sku", "seller-sku", "asin", "asin1"],
    "title": ["item-name", "product-name"],
    "description": ["item-description", "product-description"],
    "price": ["price", "standard-price"],
    "quantity": ["quantity"],
    "images": ["image-url", "main-image-url"],
    "category": ["product-category"],
    "weight": ["item-weight"],
    "dimensions": ["item-dimensions"],
}
AMAZON_IMAGE_SEPARATORS = (",",)
