"""
Configuration module for the RKM Loom Spares assistant.
Fully compatible with Streamlit Cloud deployment.
"""

import os
from dotenv import load_dotenv

# Load environment variables for local development
load_dotenv()

def get_secret(key: str, default=None):
    """Get secret from Streamlit secrets or environment variables."""
    try:
        import streamlit as st
        # Only try to access secrets if we're actually running in Streamlit
        if hasattr(st, 'secrets'):
            try:
                if key in st.secrets:
                    return st.secrets[key]
            except Exception:
                # No secrets.toml, fall through to env vars
                pass
    except ImportError:
        pass

    return os.getenv(key, default)


# Keys whose values could not be parsed
invalid_settings = []


def _as_int(key: str, default: int) -> int:
    value = get_secret(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        print(f"⚠️ {key}={value!r} is not a whole number")
        invalid_settings.append(key)
        return default


def _as_float(key: str, default: float) -> float:
    value = get_secret(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        print(f"⚠️ {key}={value!r} is not a number")
        invalid_settings.append(key)
        return default


class Config:
    """Central configuration for the application."""

    # Branding
    COMPANY_NAME = get_secret("COMPANY_NAME", "RKM LOOM SPARES")
    COMPANY_TAGLINE = "AI-Powered Textile Solutions"
    CURRENCY_SYMBOL = "₹"

    # WhatsApp deep link recipient (digits only, country code first)
    WHATSAPP_NUMBER = "".join(ch for ch in str(get_secret("WHATSAPP_NUMBER", "")) if ch.isdigit())

    # Inventory
    LOW_STOCK_THRESHOLD = _as_int("LOW_STOCK_THRESHOLD", 20)
    STOCK_CHECK_INTERVAL = _as_int("STOCK_CHECK_INTERVAL", 30)

    # Quotations
    QUOTATION_VALIDITY_DAYS = _as_int("QUOTATION_VALIDITY_DAYS", 15)

    # Assistant
    SPEECH_LANGUAGE = get_secret("SPEECH_LANGUAGE", "en-US")
    IMAGE_SCAN_DELAY = _as_float("IMAGE_SCAN_DELAY", 2.0)
    ASSISTANT_REPLY_DELAY = _as_float("ASSISTANT_REPLY_DELAY", 0.5)

    @staticmethod
    def validate_config():
        """Validates that numeric settings are usable."""
        errors = [f"❌ {key} is malformed" for key in invalid_settings]

        if Config.LOW_STOCK_THRESHOLD < 0:
            errors.append("❌ LOW_STOCK_THRESHOLD must not be negative")
        if Config.STOCK_CHECK_INTERVAL <= 0:
            errors.append("❌ STOCK_CHECK_INTERVAL must be positive")
        if Config.QUOTATION_VALIDITY_DAYS <= 0:
            errors.append("❌ QUOTATION_VALIDITY_DAYS must be positive")

        # WhatsApp number is optional (link opens the contact picker)
        if Config.WHATSAPP_NUMBER:
            print("✓ WhatsApp number configured")

        if errors:
            print("\n" + "\n".join(errors))
            raise ValueError("Configuration invalid. Check your .env file or Streamlit secrets.")

        print("✓ Configuration validated successfully")
        print(f"  • Low stock threshold: {Config.LOW_STOCK_THRESHOLD} units")
        print(f"  • Quotation validity: {Config.QUOTATION_VALIDITY_DAYS} days")

if __name__ == "__main__":
    Config.validate_config()
