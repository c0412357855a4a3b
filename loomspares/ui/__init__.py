"""
UI package for the RKM Loom Spares assistant.
Contains all Streamlit interface components.
"""

from .chat_interface import render_chat_interface
from .sidebar import render_sidebar
from .product_display import render_product_card, render_product_grid
from .product_management import render_product_management
from .enquiry import render_enquiry
from .analytics import render_analytics
from .state import init_session_state

__all__ = [
    'render_chat_interface',
    'render_sidebar',
    'render_product_card',
    'render_product_grid',
    'render_product_management',
    'render_enquiry',
    'render_analytics',
    'init_session_state'
]
