"""
Tools package for the RKM Loom Spares assistant.
Contains the in-memory catalog, filters, cart, quotation and import helpers.
"""

from .catalog_tools import CatalogTools, create_catalog
from .filter_tools import FilterTools, get_filter_tools
from .cart_tools import EnquiryCart
from .quotation_tools import build_estimation, format_estimation_text, build_whatsapp_link
from .import_tools import import_products_csv, export_products_csv
from .analytics_tools import get_inventory_stats, get_category_summary
from .image_tools import recognize_parts

__all__ = [
    'CatalogTools',
    'create_catalog',
    'FilterTools',
    'get_filter_tools',
    'EnquiryCart',
    'build_estimation',
    'format_estimation_text',
    'build_whatsapp_link',
    'import_products_csv',
    'export_products_csv',
    'get_inventory_stats',
    'get_category_summary',
    'recognize_parts'
]
