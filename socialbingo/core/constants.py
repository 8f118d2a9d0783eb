"""Global constants for the socialbingo application."""

# Board geometry
ROWS = 4
COLS = 6
TOTAL_CELLS = ROWS * COLS

# Accepted item count for a new board
MIN_ITEMS = 10
MAX_ITEMS = 20

# Game ids
GAME_ID_LENGTH = 7
GAME_ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"

# Recent games feed
RECENT_GAMES_LIMIT = 6
PREVIEW_ITEM_COUNT = 3
PREVIEW_SEPARATOR = ", "
PREVIEW_TRUNCATION = "..."
EMPTY_BOARD_PREVIEW = "Empty Board"

# Display name words
ADJECTIVES = [
    "Funky",
    "Grumpy",
    "Cheeky",
    "Sleepy",
    "Hyper",
    "Happy",
    "Salty",
    "Spicy",
    "Lucky",
    "Dizzy",
]
COLORS = [
    "Red",
    "Blue",
    "Pink",
    "Neon",
    "Lime",
    "Cosmic",
    "Rusty",
    "Golden",
    "Silver",
    "Violet",
]
NOUNS = [
    "Badger",
    "Cactus",
    "Taco",
    "Ninja",
    "Panda",
    "Toaster",
    "Pickle",
    "Muffin",
    "Wizard",
    "Goose",
]
NAME_NUMBER_MAX = 99
NAME_SEPARATOR = "-"

# Firestore collections
APP_ROOT = "artifacts"
GAMES_COLLECTION = "games"
PARTICIPANTS_COLLECTION_PREFIX = "participants_"
