"""
RKM Loom Spares: catalog, rule-based assistant, enquiry cart and quotations.
"""

__version__ = "0.1.0"
