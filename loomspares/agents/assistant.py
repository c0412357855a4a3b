"""
Assistant: rule-based loom spares helper.
Routes messages by keyword checks to catalog filters or canned replies.
"""

import re
from typing import Any, Dict, List, Tuple

from loomspares.config import Config
from loomspares.models import Product
from loomspares.tools.catalog_tools import CatalogTools
from loomspares.tools.filter_tools import get_filter_tools
from loomspares.tools.formatting import format_price, stock_label

GREETING = "Hello! I'm RKM Assistant. How can I help you with loom spares today?"

GREETING_KEYWORDS = ['hello', 'hi', 'hey', 'namaste', 'good morning', 'good evening']
PRICE_KEYWORDS = ['price', 'cost', 'rate', 'how much']
STOCK_KEYWORDS = ['stock', 'available', 'availability', 'inventory']
DELIVERY_KEYWORDS = ['delivery', 'shipping', 'dispatch', 'courier']
QUALITY_KEYWORDS = ['quality', 'warranty', 'guarantee', 'genuine']
QUOTATION_KEYWORDS = ['quote', 'quotation', 'estimate', 'estimation', 'enquiry', 'inquiry', 'cart']
CONTACT_KEYWORDS = ['contact', 'phone', 'call', 'whatsapp', 'address', 'email']
IMAGE_KEYWORDS = ['image', 'photo', 'picture', 'camera', 'identify']
HELP_KEYWORDS = ['help', 'what can you do', 'options']

CANNED_RESPONSES = {
    "delivery": (
        "We offer fast delivery across India. Standard delivery takes 3-5 business days, "
        "and express delivery takes 1-2 business days."
    ),
    "quality": (
        "All RKM Loom Spares come with a 1-year warranty. We use premium materials "
        "and follow strict quality control processes."
    ),
    "quotation": (
        "Add the spares you need to your enquiry using the ➕ buttons, then open the "
        "**Enquiry & Quotation** tab, fill in your contact details and generate an estimation. "
        "You can share it with us directly on WhatsApp."
    ),
    "image": (
        "Upload a photo of the part with the 📷 **Identify a part** option below the chat "
        "and I'll suggest matching spares from our catalog."
    ),
    "help": (
        "I can help you with:\n"
        "• Spares for a loom make, e.g. *Show me Toyota spares*\n"
        "• Budget searches, e.g. *Parts under ₹500*\n"
        "• Prices, stock levels, delivery and warranty\n"
        "• Building an enquiry and sharing an estimation on WhatsApp"
    ),
    "greeting": GREETING,
    "fallback": (
        "Thank you for your inquiry! I can help you with product information, pricing, "
        "stock levels, and orders. What specific information do you need about our loom spares?"
    ),
}

RECOMMENDATION_LIMIT = 6


class Assistant:
    """
    Keyword-driven assistant with ordered intent checks and templated answers.
    """

    def __init__(self):
        self.filter_tools = get_filter_tools()

    def process(self, user_query: str, catalog: CatalogTools) -> Dict[str, Any]:
        """
        Answer one user message.

        Args:
            user_query: The user's message
            catalog: Session catalog used for product lookups

        Returns:
            Dict with final answer, recommended products and execution trace
        """
        execution_trace = {
            "query": user_query,
            "intent": "empty",
            "steps": [],
            "final_answer": "",
            "recommendations": [],
            "success": False
        }

        if not user_query or not user_query.strip():
            return execution_trace

        try:
            execution_trace["steps"].append("🎯 Analyzing message keywords...")
            intent = self._analyze_intent(user_query, catalog)
            execution_trace["intent"] = intent["type"]
            execution_trace["steps"].append(f"🔍 Detected intent: {intent['type']}")

            answer, recommendations = self._route_query(intent, catalog, execution_trace)
            execution_trace["final_answer"] = answer
            execution_trace["recommendations"] = recommendations
            execution_trace["success"] = True

        except Exception as e:
            print(f"⚠️ Assistant error for {user_query!r}: {e}")
            execution_trace["steps"].append(f"❌ Error: {str(e)}")
            execution_trace["final_answer"] = (
                "I encountered an error processing your request. "
                "Please try rephrasing your question or ask about a loom make or spare part."
            )
            execution_trace["success"] = False

        return execution_trace

    def _analyze_intent(self, query: str, catalog: CatalogTools) -> Dict[str, Any]:
        """Ordered substring checks; the first matching group wins."""
        query_lower = query.lower()
        constraints = self._extract_constraints(query_lower, catalog)

        intent = {"type": "fallback", "constraints": constraints, "products": []}

        if constraints["category"]:
            intent["type"] = "category_search"
            return intent

        if constraints["has_price_range"]:
            intent["type"] = "price_search"
            return intent

        mentioned = self._find_mentioned_products(query_lower, catalog)
        if mentioned:
            intent["type"] = "product_lookup"
            intent["products"] = mentioned
            return intent

        keyword_groups = [
            ("price_info", PRICE_KEYWORDS),
            ("stock_info", STOCK_KEYWORDS),
            ("delivery", DELIVERY_KEYWORDS),
            ("quality", QUALITY_KEYWORDS),
            ("quotation", QUOTATION_KEYWORDS),
            ("contact", CONTACT_KEYWORDS),
            ("image", IMAGE_KEYWORDS),
            ("help", HELP_KEYWORDS),
            ("greeting", GREETING_KEYWORDS),
        ]
        for intent_type, keywords in keyword_groups:
            if any(_contains_keyword(query_lower, keyword) for keyword in keywords):
                intent["type"] = intent_type
                return intent

        return intent

    def _extract_constraints(self, query_lower: str, catalog: CatalogTools) -> Dict[str, Any]:
        """Extract category and price range from the message."""
        constraints = {
            'min_price': 0,
            'max_price': float('inf'),
            'has_price_range': False,
            'category': catalog.map_category(query_lower)
        }

        under_match = re.search(r'\b(?:under|below|less than|within|max|maximum)\b\s*(?:rs\.?|₹)?\s*(\d+(?:,\d+)*)', query_lower)
        if under_match:
            constraints['max_price'] = _to_number(under_match.group(1))
            constraints['has_price_range'] = True

        above_match = re.search(r'\b(?:above|over|more than|min|minimum)\b\s*(?:rs\.?|₹)?\s*(\d+(?:,\d+)*)', query_lower)
        if above_match:
            constraints['min_price'] = _to_number(above_match.group(1))
            constraints['has_price_range'] = True

        between_match = re.search(r'\bbetween\s*(?:rs\.?|₹)?\s*(\d+(?:,\d+)*)\s*(?:and|to|-)\s*(?:rs\.?|₹)?\s*(\d+(?:,\d+)*)', query_lower)
        if between_match:
            low = _to_number(between_match.group(1))
            high = _to_number(between_match.group(2))
            constraints['min_price'], constraints['max_price'] = min(low, high), max(low, high)
            constraints['has_price_range'] = True

        around_match = re.search(r'\baround\s*(?:rs\.?|₹)?\s*(\d+(?:,\d+)*)', query_lower)
        if around_match:
            price = _to_number(around_match.group(1))
            constraints['min_price'] = price * 0.8
            constraints['max_price'] = price * 1.2
            constraints['has_price_range'] = True

        return constraints

    def _find_mentioned_products(self, query_lower: str, catalog: CatalogTools) -> List[Product]:
        """Products whose code or name appears in the message, else products tagged with a word in it."""
        products = catalog.list_products()

        exact = [
            p for p in products
            if (p.code and p.code.lower() in query_lower) or p.name.lower() in query_lower
        ]
        if exact:
            return exact

        return [
            p for p in products
            if any(_contains_keyword(query_lower, tag.lower()) for tag in p.tags)
        ]

    def _route_query(self, intent: Dict, catalog: CatalogTools,
                     execution_trace: Dict) -> Tuple[str, List[Product]]:
        constraints = intent["constraints"]
        intent_type = intent["type"]

        if intent_type == "category_search":
            category = constraints["category"]
            execution_trace["steps"].append(
                f"🏭 Filtering {category} spares (₹{constraints['min_price']:,.0f} - {_max_label(constraints)})"
            )
            results = self.filter_tools.filter_by_category_and_price(
                catalog.list_products(), category,
                constraints['min_price'], constraints['max_price']
            )
            execution_trace["steps"].append(f"✓ Found {len(results)} {category} products")
            return self.format_product_response(results, f"{category} spares", constraints), results[:RECOMMENDATION_LIMIT]

        if intent_type == "price_search":
            execution_trace["steps"].append(
                f"💰 Filtering by price (₹{constraints['min_price']:,.0f} - {_max_label(constraints)})"
            )
            results = self.filter_tools.filter_by_price(
                catalog.list_products(), constraints['min_price'], constraints['max_price']
            )
            execution_trace["steps"].append(f"✓ Found {len(results)} products in range")
            return self.format_product_response(results, "spares in your budget", constraints), results[:RECOMMENDATION_LIMIT]

        if intent_type == "product_lookup":
            results = intent["products"]
            execution_trace["steps"].append(f"📦 Matched {len(results)} product(s) by name, code or tag")
            return self.format_product_details(results), results[:RECOMMENDATION_LIMIT]

        if intent_type == "price_info":
            return self.format_price_overview(catalog), []

        if intent_type == "stock_info":
            low_stock = catalog.get_low_stock_products(Config.LOW_STOCK_THRESHOLD)
            execution_trace["steps"].append(f"📉 {len(low_stock)} product(s) at or below {Config.LOW_STOCK_THRESHOLD} units")
            return self.format_stock_overview(catalog), low_stock[:RECOMMENDATION_LIMIT]

        if intent_type == "contact":
            return self.format_contact(), []

        execution_trace["steps"].append("💬 Using canned response")
        return CANNED_RESPONSES.get(intent_type, CANNED_RESPONSES["fallback"]), []

    def format_product_response(self, results: List[Product], label: str, constraints: Dict) -> str:
        """Format filtered results with natural language summary."""
        if not results:
            return (
                f"Sorry, we don't have any {label} right now. "
                "Try a different budget or ask about another loom make."
            )

        response = f"**Found {len(results)} {label}:**\n\n"
        for i, product in enumerate(results[:10], 1):
            response += f"{i}. **{product.name}** ({product.code})\n"
            response += f"   • Price: **{format_price(product.price)}**\n"
            response += f"   • Stock: {product.stock} units ({stock_label(product.stock)})\n\n"

        if len(results) > 10:
            response += f"*...and {len(results) - 10} more in the Products tab*\n\n"

        cheapest = min(p.price for p in results)
        dearest = max(p.price for p in results)
        response += f"**Summary:** Prices range from {format_price(cheapest)} to {format_price(dearest)}. "
        response += "Add any of these to your enquiry for a quotation!"
        return response

    def format_product_details(self, products: List[Product]) -> str:
        response = ""
        for product in products[:5]:
            response += f"**{product.name}** ({product.code}) | {product.category.value}\n\n"
            if product.description:
                response += f"{product.description}\n\n"
            response += f"• Price: **{format_price(product.price)}**\n"
            response += f"• Stock: {product.stock} units ({stock_label(product.stock)})\n"
            if product.compatibility:
                response += f"• Compatible with: {', '.join(product.compatibility)}\n"
            for key, value in product.specifications.items():
                response += f"• {key}: {value}\n"
            response += "\n"
        return response.strip()

    def format_price_overview(self, catalog: CatalogTools) -> str:
        products = catalog.list_products()
        if not products:
            return "Our catalog is being updated. Please check back soon for pricing."

        starting = []
        for category in catalog.get_all_categories():
            cheapest = min(p.price for p in catalog.get_products_by_category(category))
            starting.append(f"{category} spares from {format_price(cheapest, 0)}")
        return (
            "Our loom spare prices vary by product. "
            + ", ".join(starting)
            + ". Would you like specific pricing for any product?"
        )

    def format_stock_overview(self, catalog: CatalogTools) -> str:
        products = catalog.list_products()
        if not products:
            return "Our catalog is empty right now."

        levels = ", ".join(f"{p.stock} x {p.name}" for p in products[:8])
        response = f"We maintain good stock levels for our products. Currently we have {levels} in stock."
        low_stock = catalog.get_low_stock_products(Config.LOW_STOCK_THRESHOLD)
        if low_stock:
            names = ", ".join(p.name for p in low_stock)
            response += f"\n\n⚠️ Running low: {names}. Enquire soon to reserve yours."
        return response

    def format_contact(self) -> str:
        response = f"You can reach {Config.COMPANY_NAME} on WhatsApp"
        if Config.WHATSAPP_NUMBER:
            response += f" at +{Config.WHATSAPP_NUMBER}"
        return response + ". Share your estimation there and our team will confirm availability and delivery."

    def format_image_matches(self, matches: List[Product]) -> str:
        """Reply for an uploaded part photo."""
        if not matches:
            return "I couldn't match that photo to any spare in our catalog. Try describing the part instead."
        names = ", ".join(f"**{p.name}** ({p.code})" for p in matches)
        return f"📷 Based on your photo, this looks like: {names}. Add it to your enquiry for a quotation."


def _contains_keyword(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def _to_number(value: str) -> float:
    return float(value.replace(',', ''))


def _max_label(constraints: Dict) -> str:
    if constraints['max_price'] == float('inf'):
        return "no limit"
    return f"₹{constraints['max_price']:,.0f}"

# Singleton instance
_assistant_instance = None

def get_assistant() -> Assistant:
    """Get or create the Assistant singleton instance."""
    global _assistant_instance
    if _assistant_instance is None:
        _assistant_instance = Assistant()
    return _assistant_instance
