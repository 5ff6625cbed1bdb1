"""Template-based product overview generation.

No model is called: the product type is guessed from keywords in the name
and dropped into one of a handful of canned sentences.
"""

import random
from typing import List, Optional

import structlog

logger = structlog.get_logger(__name__)


PRODUCT_TYPE_KEYWORDS = (
    # Computing
    "laptop", "computer", "monitor", "keyboard", "mouse", "tablet", "printer",
    "scanner", "router", "modem", "drive", "storage", "memory", "processor",
    "gpu", "cpu", "motherboard", "case", "cooler", "fan", "heatsink",
    # Phones & audio/video
    "phone", "camera", "headphones", "speaker", "watch", "tv", "television",
    # Furniture
    "chair", "desk", "table", "sofa", "bed", "mattress",
    # Kitchen
    "blender", "mixer", "toaster", "microwave", "refrigerator",
    # Accessories
    "arm", "stand", "mount", "cable", "adapter", "charger", "battery",
)

# Two-word types, tried only when no single keyword matches. "power" and
# "supply" are kept out of PRODUCT_TYPE_KEYWORDS on purpose: as single words
# they would cut "power supply" down to "power" before a pair is ever tried.
PRODUCT_TYPE_PHRASES = (
    "power supply",
    "power bank",
    "air fryer",
    "coffee maker",
    "vacuum cleaner",
    "hair dryer",
    "water purifier",
    "smart plug",
)

DEFAULT_PRODUCT_TYPE = "product"

FALLBACK_DESCRIPTION = (
    "This product offers a combination of quality and functionality designed to meet "
    "user needs. It features practical design elements and durable construction for "
    "reliable performance."
)

TEMPLATES = (
    "This {name} is designed for optimal performance and user satisfaction. It offers a "
    "combination of durability and functionality, making it a practical choice for "
    "everyday use.",
    "The {name} features high-quality construction and thoughtful design elements. It's "
    "built to provide reliable performance while meeting the needs of its target users.",
    "This {product_type} offers excellent value with its combination of quality materials "
    "and practical features. It's designed to enhance user experience while maintaining "
    "durability for long-term use.",
    "The {name} stands out for its thoughtful design and quality construction. It provides "
    "the essential features users expect from a {product_type} while offering reliable "
    "performance.",
    "This {product_type} combines practical functionality with quality craftsmanship. It's "
    "designed to meet the needs of users looking for a reliable and effective solution.",
)


class DescriptionGenerator:
    """Fill a random overview template with the product name and type."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize generator.

        Args:
            rng: Random source used to pick a template (seed it in tests)
        """
        self.rng = rng or random.Random()

    @staticmethod
    def categorize(name: str) -> str:
        """Guess the product type from its name.

        Single-word types are checked first, in name order; then adjacent
        word pairs. Falls back to "product".
        """
        words: List[str] = name.lower().split()

        for word in words:
            if word in PRODUCT_TYPE_KEYWORDS:
                return word

        for first, second in zip(words, words[1:]):
            phrase = f"{first} {second}"
            if phrase in PRODUCT_TYPE_PHRASES:
                return phrase

        return DEFAULT_PRODUCT_TYPE

    def generate(self, name: str) -> str:
        """Return an overview sentence for ``name``; never raises."""
        try:
            product_type = self.categorize(name)
            template = self.rng.choice(TEMPLATES)
            return template.format(name=name, product_type=product_type)
        except Exception as e:
            logger.warning("description_generation_failed", error=str(e))
            return FALLBACK_DESCRIPTION
