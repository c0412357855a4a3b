"""
Import Tools: CSV import and export of the product catalog.
Also holds the list/specification parsers shared with the product forms.
"""

import math
import re
from typing import Dict, List

import pandas as pd
from pydantic import ValidationError

from loomspares.models import Product

REQUIRED_COLUMNS = ["name", "category", "price", "stock"]
OPTIONAL_COLUMNS = ["code", "description", "image", "compatibility", "tags", "specifications"]
EXPORT_COLUMNS = ["id", "code"] + REQUIRED_COLUMNS + [c for c in OPTIONAL_COLUMNS if c != "code"]
CSV_LIST_SEPARATORS = r"[;|]"
FORM_LIST_SEPARATORS = r"[;|,\n]"


def split_list(text: str, separators: str = CSV_LIST_SEPARATORS) -> List[str]:
    """
    Split a list cell into a clean list.

    CSV cells use ';' or '|' so values like "JAT 710, JAT 810 series" survive;
    the product forms also accept commas and new lines (FORM_LIST_SEPARATORS).
    """
    if not text:
        return []
    return [part.strip() for part in re.split(separators, str(text)) if part.strip()]


def parse_specifications(text: str) -> Dict[str, str]:
    """
    Parse 'Key: Value' pairs separated by ';' or new lines.

    Example:
        "Material: Steel; Dents: 80/inch" -> {"Material": "Steel", "Dents": "80/inch"}
    """
    specs = {}
    if not text:
        return specs
    for pair in re.split(r"[;\n]", str(text)):
        if ":" not in pair:
            continue
        key, value = pair.split(":", 1)
        if key.strip():
            specs[key.strip()] = value.strip()
    return specs


def format_specifications(specs: Dict[str, str], separator: str = "; ") -> str:
    return separator.join(f"{key}: {value}" for key, value in specs.items())


def clean_price(price_value) -> float:
    """Clean and convert price string to float."""
    if price_value is None or (isinstance(price_value, float) and pd.isna(price_value)):
        raise ValueError("price is missing")

    # Convert to string and clean
    price_str = str(price_value).lower()
    # Remove currency symbols and common separators
    price_str = re.sub(r'(rs\.?|inr|[₹$,\s])', '', price_str)

    try:
        price = float(price_str)
    except ValueError:
        raise ValueError(f"invalid price {price_value!r}")
    if not math.isfinite(price):
        raise ValueError(f"invalid price {price_value!r}")
    return price


def clean_stock(stock_value) -> int:
    stock_str = str(stock_value).replace(",", "").strip()
    try:
        stock = float(stock_str)
    except ValueError:
        raise ValueError(f"invalid stock {stock_value!r}")
    if not stock.is_integer():
        raise ValueError(f"stock must be a whole number, got {stock_value!r}")
    return int(stock)


def row_to_product_data(row: Dict[str, str]) -> Dict:
    """Convert one CSV row into keyword arguments for CatalogTools.add_product."""
    return {
        "code": row.get("code", ""),
        "name": row.get("name", ""),
        "category": row.get("category", ""),
        "price": clean_price(row.get("price")),
        "stock": clean_stock(row.get("stock")),
        "description": row.get("description", ""),
        "image": row.get("image") or None,
        "compatibility": split_list(row.get("compatibility", "")),
        "tags": split_list(row.get("tags", "")),
        "specifications": parse_specifications(row.get("specifications", "")),
    }


def import_products_csv(source, catalog) -> Dict:
    """
    Import products from a CSV file into the catalog.

    Args:
        source: Path or file-like object (e.g. a Streamlit UploadedFile)
        catalog: CatalogTools receiving the valid rows

    Returns:
        Dict with imported products and per-row error messages
    """
    result = {"imported": [], "errors": []}

    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        print(f"❌ CSV import failed: {e}")
        result["errors"].append(f"Could not read CSV: {e}")
        return result

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        result["errors"].append(f"Missing required columns: {', '.join(missing)}")
        print(f"❌ CSV import failed: missing columns {missing}")
        return result

    for idx, row in df.iterrows():
        line_no = idx + 2  # header is line 1
        try:
            data = row_to_product_data({k: str(v).strip() for k, v in row.items()})
            product = catalog.add_product(data)
            result["imported"].append(product)
        except (ValueError, ValidationError) as e:
            message = _describe_error(e)
            print(f"  ⚠ Skipping line {line_no}: {message}")
            result["errors"].append(f"Line {line_no}: {message}")

    print(f"✓ Imported {len(result['imported'])}/{len(df)} products from CSV")
    return result


def export_products_csv(products: List[Product]) -> bytes:
    """Serialize products to CSV bytes in the import format."""
    rows = []
    for p in products:
        rows.append({
            "id": p.id,
            "code": p.code,
            "name": p.name,
            "category": p.category.value,
            "price": p.price,
            "stock": p.stock,
            "description": p.description,
            "image": p.image or "",
            "compatibility": "; ".join(p.compatibility),
            "tags": "; ".join(p.tags),
            "specifications": format_specifications(p.specifications),
        })
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return df.to_csv(index=False).encode("utf-8")


def _describe_error(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in error.errors()
        )
    return str(error)
