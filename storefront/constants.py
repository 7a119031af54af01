from types import MappingProxyType

# Category assigned when no keyword matches
GENERAL_CATEGORY = "general"

# Vocabulary scanned in order; the first hit becomes the color filter
COLOR_VOCABULARY = (
    "red", "blue", "green", "yellow", "black", "white", "pink",
    "purple", "orange", "brown", "gray", "grey", "navy",
)

BRAND_VOCABULARY = (
    "samsung", "apple", "sony", "hp", "nintendo", "hanes",
    "lego", "coleman", "oral-b", "olay",
)

# Declaration order is the classification priority.
# Home precedes food so "coffee maker" resolves to an appliance.
CATEGORY_KEYWORDS = MappingProxyType({
    "clothing": (
        "shirt", "top", "jacket", "coat", "raincoat", "dress", "pants", "jeans",
        "hoodie", "tank", "shoes", "sneakers", "clothing", "apparel",
    ),
    "electronics": (
        "phone", "laptop", "headphones", "speaker", "tv", "computer", "tablet",
        "gaming", "console", "camera", "electronics",
    ),
    "home": (
        "coffee maker", "appliance", "furniture", "decor", "lamp", "pillow",
        "dinnerware", "kitchen", "home",
    ),
    "food": (
        "snacks", "food", "drink", "coffee", "tea", "soda", "milk", "banana",
        "fruit", "vegetable", "grocery",
    ),
    "toys": ("toy", "game", "gift", "blocks", "car", "educational", "kids"),
    "health": (
        "medicine", "vitamin", "health", "beauty", "skincare", "toothbrush",
        "cream", "supplement",
    ),
    "sports": (
        "yoga", "fitness", "exercise", "dumbbell", "camping", "tent", "sports",
        "outdoor", "workout",
    ),
})

CATEGORIES = tuple(CATEGORY_KEYWORDS) + (GENERAL_CATEGORY,)

# (intent, trigger phrases), checked in order
INTENT_TRIGGERS = (
    ("find", ("find", "show me", "look for")),
    ("compare", ("compare", "versus", "vs")),
    ("buy", ("buy", "purchase", "order")),
)

# (audience, exact phrases), checked in order
GENDER_PHRASES = (
    ("men", ("men's", "mens", "male")),
    ("women", ("women's", "womens", "female")),
    ("kids", ("kids", "children", "child")),
)

# (threshold, phrases), checked in order
RATING_PHRASES = (
    (4.0, ("good reviews", "highly rated", "4 star")),
    (4.5, ("excellent", "top rated", "5 star")),
    (4.7, ("best rated", "highest rated")),
)

# Longer forms first; "max $50" must not be read out of "maximum $50"
PRICE_MAX_PHRASES = ("under", "less than", "below", "up to", "maximum", "max")
PRICE_MIN_PHRASES = ("over", "more than", "above", "at least", "minimum", "min")

# Opt-in qualitative price bounds
CHEAP_PHRASES = ("cheap", "budget", "affordable")
CHEAP_PRICE_MAX = 50.0
EXPENSIVE_PHRASES = ("expensive", "premium")
EXPENSIVE_PRICE_MIN = 100.0

IN_STOCK_PHRASES = ("in stock", "available now")
FEATURED_PHRASES = ("featured",)

LOCATION_PHRASES = ("near me", "nearby", "local", "in store")
USER_LOCATION = "user_location"

# Removed from the residual search text
STOP_PHRASES = (
    "show me", "find", "search", "i need", "looking for", "look for", "want",
    "get", "buy", "help me", "can you", "please", "thanks", "thank you",
)

# Number of example products named in a summary
SUMMARY_EXAMPLE_COUNT = 3
