"""
Session state bootstrap. Everything the page mutates lives here for the session lifetime.
"""

import streamlit as st

from loomspares.agents.assistant import GREETING
from loomspares.models import Message, MessageRole
from loomspares.tools.cart_tools import EnquiryCart
from loomspares.tools.catalog_tools import CatalogTools, create_catalog


def greeting_message() -> Message:
    return Message(role=MessageRole.ASSISTANT, content=GREETING)


def init_session_state():
    """Create the catalog, transcript and cart on first run of a session."""
    if 'catalog' not in st.session_state:
        st.session_state.catalog = create_catalog()
    if 'messages' not in st.session_state or not st.session_state.messages:
        st.session_state.messages = [greeting_message()]
    if 'cart' not in st.session_state:
        st.session_state.cart = EnquiryCart()
    if 'estimation' not in st.session_state:
        st.session_state.estimation = None
    if 'low_stock_alert' not in st.session_state:
        st.session_state.low_stock_alert = False
    if 'uploader_nonce' not in st.session_state:
        st.session_state.uploader_nonce = 0


def get_catalog() -> CatalogTools:
    return st.session_state.catalog


def get_cart() -> EnquiryCart:
    return st.session_state.cart


def reset_chat():
    st.session_state.messages = [greeting_message()]
