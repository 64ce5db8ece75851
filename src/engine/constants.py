"""
Craps Quest - Game Constants

Fixed rule values shared by every engine module.
"""

# Player starting values
STARTING_GOLD = 4
STARTING_VICTORY_POINTS = 0
STARTING_DAMAGE = 0

# Victory conditions
VICTORY_POINTS_TO_WIN = 10
DAMAGE_LEADER_BONUS = 3

# Card limits
MAX_PERMANENT_CARDS = 6
MAX_SINGLE_USE_CARDS = 8

# Marketplace
MARKETPLACE_SIZE = 8
MARKETPLACE_REFRESH_COST = 3

# Dice
DEFAULT_DICE_COUNT = 2
DICE_SIDES = 6
TWO_DICE_OUTCOMES = DICE_SIDES * DICE_SIDES

# Craps numbers
NATURAL_NUMBERS = frozenset({7, 11})
CRAPS_NUMBERS = frozenset({2, 3, 12})
POINT_NUMBERS = frozenset({4, 5, 6, 8, 9, 10})
CRAP_OUT_NUMBER = 7
ESCAPE_NUMBER = 2
MIN_ROLL_SUM = 2
MAX_ROLL_SUM = 12

# Lose half of the gold on craps / crap-out
CRAP_OUT_GOLD_PENALTY_PERCENT = 0.5

# Player limits
MIN_PLAYERS = 2
MAX_PLAYERS = 8

# Monster track
MONSTER_COUNT = 10

# Betting
MAX_BET_AMOUNT = 5
