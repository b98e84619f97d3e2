"""Constants and point values for the scouting analytics engine."""

# Auto period
AUTO_CLIMB_BONUS = 10
AUTO_CLIMB_RATE_THRESHOLD = 0.5  # strictly greater than
MAX_AUTO_CLIMBERS = 2  # per alliance

# Endgame climb bonus by rounded average climb level
CLIMB_LEVEL_POINTS = {
    0: 0,
    1: 15,
    2: 20,
    3: 30,
}

MAX_CLIMB_LEVEL = 3
ALLIANCE_SIZE = 3

# Win probability returned when neither alliance projects any points
DEFAULT_WIN_PROBABILITY = 50

# Averages a caller may rank the team pool by
RANKABLE_METRICS = (
    'avg_score',
    'avg_auto',
    'avg_teleop',
    'avg_teleop_fuel',
    'avg_climb',
    'avg_climb_level',
    'avg_defense',
    'avg_speed',
    'avg_shooting_speed',
    'avg_hopper',
    'auto_climb_rate',
    'total_matches',
)

# Pool threshold field -> team average it is compared against
THRESHOLD_FIELDS = {
    'min_score': 'avg_score',
    'min_defense': 'avg_defense',
    'min_hopper': 'avg_hopper',
    'min_climb': 'avg_climb',
}

# Persisted key prefixes, namespaced as <prefix>_<competition_id>
FIRST_PICK_KEY = 'pick_1st'
SECOND_PICK_KEY = 'pick_2nd'
PICKED_KEY = 'picked'
LAST_COMPETITION_KEY = 'analysis_last_comp_id'

# Radar chart scales (team detail view)
RADAR_RATING_SCALE = 5.0  # speed, shooting speed and defense are rated 0-5
