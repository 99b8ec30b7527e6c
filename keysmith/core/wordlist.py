"""
Bundled word list for memorable passphrases.

256 short, common, distinct lowercase English nouns and verbs, so each
word contributes exactly 8 bits of entropy. The order is part of the
determinism contract: a given random index must map to the same word on
every platform.
"""

DEFAULT_WORD_LIST: tuple[str, ...] = (
    "able", "acid", "acorn", "actor", "adapt", "admit", "adult", "agent",
    "agree", "ahead", "aim", "air", "alarm", "album", "alert", "alien",
    "alley", "alpha", "amber", "anchor", "angle", "ankle", "apple", "april",
    "apron", "arch", "arena", "argue", "arm", "armor", "arrow", "art",
    "ash", "atlas", "atom", "attic", "audio", "aunt", "autumn", "avoid",
    "awake", "axis", "baby", "bacon", "badge", "bag", "baker", "balance",
    "ball", "bamboo", "banana", "band", "bank", "barn", "basket", "bath",
    "beach", "bean", "bear", "beauty", "bed", "bee", "beef", "bell",
    "belt", "bench", "berry", "bike", "bird", "biscuit", "blade", "blanket",
    "blast", "blue", "board", "boat", "body", "bone", "book", "boot",
    "bottle", "box", "brain", "branch", "brass", "bread", "brick", "bridge",
    "brush", "bubble", "bucket", "buffalo", "bulb", "bunny", "butter", "button",
    "cabin", "cable", "cactus", "cake", "camel", "camera", "camp", "canal",
    "candle", "canoe", "canvas", "canyon", "cape", "captain", "car", "carbon",
    "card", "carpet", "carrot", "castle", "cat", "cave", "cedar", "chair",
    "chalk", "cherry", "chess", "chicken", "chief", "circle", "city", "clay",
    "cliff", "clock", "cloud", "clover", "coast", "cobra", "coconut", "coffee",
    "coin", "comet", "coral", "corn", "cotton", "couch", "cousin", "crane",
    "crater", "crayon", "cream", "creek", "cricket", "crown", "cube", "cup",
    "curtain", "cycle", "dance", "dawn", "deer", "desert", "desk", "diamond",
    "dinner", "dock", "dolphin", "donkey", "door", "dragon", "drum", "duck",
    "eagle", "earth", "echo", "elbow", "elephant", "ember", "engine", "falcon",
    "farm", "feather", "fence", "fern", "ferry", "field", "finger", "fire",
    "fish", "flag", "flame", "flute", "forest", "fossil", "fox", "frost",
    "garden", "garlic", "gate", "gecko", "giant", "ginger", "glacier", "globe",
    "glove", "goat", "gold", "grape", "grass", "gravel", "guitar", "hammer",
    "harbor", "hat", "hawk", "hazel", "heart", "helmet", "hill", "honey",
    "horse", "hotel", "island", "ivory", "jacket", "jaguar", "jelly", "jungle",
    "kettle", "kite", "koala", "ladder", "lake", "lamp", "lantern", "lava",
    "lemon", "lily", "lion", "lizard", "llama", "lobster", "magnet", "mango",
    "maple", "marble", "meadow", "melon", "mirror", "monkey", "moon", "moose",
    "mountain", "mouse", "mushroom", "needle", "nest", "ocean", "olive", "onion",
)
