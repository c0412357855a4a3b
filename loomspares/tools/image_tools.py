"""
Image Tools: part "recognition" from an uploaded photo.

No image analysis happens here. The UI shows a scanning delay and then
suggests the first catalog entries as likely matches.
"""

from typing import List, Optional

from loomspares.models import Product

MAX_MATCHES = 2


def recognize_parts(image: Optional[bytes], products: List[Product]) -> List[Product]:
    """Return the suggested matches for an uploaded part photo."""
    if not image:
        return []
    return list(products[:MAX_MATCHES])
