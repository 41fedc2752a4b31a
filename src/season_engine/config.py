# Season formats
SEASON_FORMATS = ("regular", "legacy")
DEFAULT_SEASON_FORMAT = "regular"

# Precondition tiers (single episode vs. full season)
EPISODE_MIN_QUEENS = 4
EPISODE_MIN_SONGS = 1
SEASON_MIN_QUEENS = 6
SEASON_MIN_SONGS = 5

FINALE_SIZE = 4
FINALE_CHALLENGE = "Finale Challenge"
FINALE_LABEL = "Finale"

# Attribute range
SCORE_MIN = 1.0
SCORE_MAX = 10.0

# Challenge categories in draw order
CHALLENGES = [
    "Design Challenge",
    "Acting Challenge",
    "Comedy Challenge",
    "Singing Challenge",
    "Dance Challenge",
    "Improv Challenge",
    "Roast Challenge",
    "Snatch Game",
    "Ball Challenge",
    "Makeover Challenge",
    "Commercial Challenge",
    "Rusical",
    "Girl Groups",
]

GIRL_GROUPS = "Girl Groups"
GIRL_GROUPS_MIN_QUEENS = 6

_DESIGN_WEIGHTS = {
    "design_vision": 0.4,
    "runway_presence": 0.3,
    "novelty": 0.2,
    "conceptual_depth": 0.1,
}
_ACTING_WEIGHTS = {
    "acting_ability": 0.4,
    "versatility": 0.2,
    "conflict_resilience": 0.2,
    "star_power": 0.2,
}
_COMEDY_WEIGHTS = {
    "comedy_chops": 0.4,
    "risk_tolerance": 0.2,
    "star_power": 0.2,
    "adaptability": 0.2,
}
_SINGING_WEIGHTS = {
    "vocal_musicality": 0.4,
    "runway_presence": 0.2,
    "star_power": 0.2,
    "versatility": 0.2,
}

# Challenge category -> attribute weights for the base performance score
CHALLENGE_WEIGHTS = {
    "Design Challenge": _DESIGN_WEIGHTS,
    "Ball Challenge": _DESIGN_WEIGHTS,
    "Acting Challenge": _ACTING_WEIGHTS,
    "Commercial Challenge": _ACTING_WEIGHTS,
    "Comedy Challenge": _COMEDY_WEIGHTS,
    "Roast Challenge": _COMEDY_WEIGHTS,
    "Snatch Game": _COMEDY_WEIGHTS,
    "Singing Challenge": _SINGING_WEIGHTS,
    "Rusical": _SINGING_WEIGHTS,
    "Girl Groups": {
        "vocal_musicality": 0.3,
        "lip_sync_prowess": 0.3,
        "star_power": 0.2,
        "adaptability": 0.2,
    },
    "Dance Challenge": {
        "runway_presence": 0.3,
        "lip_sync_prowess": 0.3,
        "star_power": 0.2,
        "risk_tolerance": 0.2,
    },
    "Improv Challenge": {
        "comedy_chops": 0.3,
        "adaptability": 0.3,
        "risk_tolerance": 0.2,
        "versatility": 0.2,
    },
    "Makeover Challenge": {
        "design_vision": 0.3,
        "congeniality": 0.3,
        "versatility": 0.2,
        "adaptability": 0.2,
    },
}

# Used for any category not in CHALLENGE_WEIGHTS (e.g. the finale)
DEFAULT_CHALLENGE_WEIGHTS = {
    "versatility": 0.3,
    "star_power": 0.3,
    "adaptability": 0.2,
    "risk_tolerance": 0.2,
}

RUNWAY_WEIGHTS = {
    "runway_presence": 0.4,
    "design_vision": 0.3,
    "novelty": 0.2,
    "star_power": 0.1,
}
RUNWAY_RANDOM_RANGE = (0.85, 1.15)

LIP_SYNC_WEIGHTS = {
    "lip_sync_prowess": 0.4,
    "star_power": 0.2,
    "conflict_resilience": 0.2,
    "runway_presence": 0.2,
}
LIP_SYNC_RANDOM_RANGE = (0.8, 1.2)

# Under-pressure lip sync adjustment by conflict resilience
RESILIENT_THRESHOLD = 8
FRAGILE_THRESHOLD = 4
RESILIENT_BONUS_PER_BOTTOM = 0.1
RESILIENT_BONUS_CAP = 0.3
FRAGILE_PENALTY_PER_BOTTOM = 0.15
FRAGILE_PENALTY_CAP = 0.4

# Challenge score modifiers
RUNWAY_IMPACT = 0.1
RISK_IMPACT_PER_POINT = 0.05
CHALLENGE_RANDOM_RANGE = (0.9, 1.1)
PRESSURE_MULTIPLIERS = {
    "Pressured": 0.9,
    "Determined": 1.1,
    "Confident": 1.05,
}

# Risk taking
RISK_STATE_MULTIPLIERS = {
    "Pressured": 1.2,
    "Confident": 0.9,
}
RISK_VARIANCE_MIN = 0.2
RISK_VARIANCE_SPAN = 0.4

# Combined ranking score
CHALLENGE_SHARE = 0.7
RUNWAY_SHARE = 0.3

# Production bias from track record
BIAS_WIN_WEIGHT = 0.8
BIAS_BOTTOM_WEIGHT = 0.4
BIAS_FACTOR = 0.6
FINALE_WIN_BONUS = 0.4

# Morale carried across episodes
MORALE_MIN = -0.5
MORALE_MAX = 0.6
MORALE_WIN_BOOST = 0.2
MORALE_BOTTOM_DROP = 0.15
MORALE_SURVIVAL_BOOST = 0.1
MORALE_GROWTH_BONUS = 0.2
GROWTH_MIN_PLACEMENTS = 4

# Legacy elimination choice
PERFORMANCE_WEIGHT = 7
STRATEGIC_CONGENIALITY_BELOW = 5
STRATEGIC_RESILIENCE_ABOVE = 7
COMPETITOR_WEIGHT = 5
COMPETITOR_STRENGTH_WEIGHTS = {
    "star_power": 0.4,
    "versatility": 0.3,
    "adaptability": 0.3,
}
RELATIONSHIP_BIAS_WEIGHT = 10

# Relationship graph
STRENGTH_MIN = 1
STRENGTH_MAX = 10
POSITIVE_RELATIONSHIPS = ("alliance", "friendship")
NEGATIVE_RELATIONSHIPS = ("rivalry", "conflict")
EDGE_REFRESH_AGE = 2
