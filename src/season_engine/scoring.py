"""Per-queen performance scoring.

Pure functions: the only side effect is consuming draws from the supplied
:class:`RandomSource`. Every returned score is clamped to [1, 10].
"""

from src.season_engine.config import (
    BIAS_BOTTOM_WEIGHT,
    BIAS_FACTOR,
    BIAS_WIN_WEIGHT,
    CHALLENGE_RANDOM_RANGE,
    CHALLENGE_SHARE,
    CHALLENGE_WEIGHTS,
    DEFAULT_CHALLENGE_WEIGHTS,
    FINALE_WIN_BONUS,
    FRAGILE_PENALTY_CAP,
    FRAGILE_PENALTY_PER_BOTTOM,
    FRAGILE_THRESHOLD,
    LIP_SYNC_RANDOM_RANGE,
    LIP_SYNC_WEIGHTS,
    PRESSURE_MULTIPLIERS,
    RESILIENT_BONUS_CAP,
    RESILIENT_BONUS_PER_BOTTOM,
    RESILIENT_THRESHOLD,
    RISK_IMPACT_PER_POINT,
    RISK_STATE_MULTIPLIERS,
    RISK_VARIANCE_MIN,
    RISK_VARIANCE_SPAN,
    RUNWAY_IMPACT,
    RUNWAY_RANDOM_RANGE,
    RUNWAY_SHARE,
    RUNWAY_WEIGHTS,
    SCORE_MAX,
    SCORE_MIN,
)
from src.season_engine.models import Queen
from src.season_engine.randomness import RandomSource


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def base_challenge_score(queen: Queen, challenge: str) -> float:
    """Raw ability for a challenge category, before any modifiers."""
    weights = CHALLENGE_WEIGHTS.get(challenge, DEFAULT_CHALLENGE_WEIGHTS)
    return queen.weighted_sum(weights)


def runway_score(queen: Queen, rng: RandomSource) -> float:
    base = queen.weighted_sum(RUNWAY_WEIGHTS)
    return clamp(base * rng.uniform(*RUNWAY_RANDOM_RANGE))


def risk_taking(queen: Queen, pressure_state: str, rng: RandomSource) -> float:
    """How big a swing the queen takes this week.

    Variance widens with risk tolerance: +/-20% at 0 up to +/-60% at 10.
    """
    base = queen.risk_tolerance * RISK_STATE_MULTIPLIERS.get(pressure_state, 1.0)
    variance = RISK_VARIANCE_MIN + (queen.risk_tolerance / 10) * RISK_VARIANCE_SPAN
    factor = rng.uniform(1 - variance, 1 + variance)
    return clamp(base * factor)


def challenge_score(
    queen: Queen,
    challenge: str,
    runway: float,
    pressure_state: str,
    risk: float,
    rng: RandomSource,
) -> float:
    """Main challenge performance.

    Formula::

        (base + 0.1 * runway) * pressure_mult * (1 + (risk - 5) * 0.05) * U(0.9, 1.1)
    """
    base = base_challenge_score(queen, challenge)
    pressure_mult = PRESSURE_MULTIPLIERS.get(pressure_state, 1.0)
    risk_mult = 1 + (risk - 5) * RISK_IMPACT_PER_POINT
    score = (base + runway * RUNWAY_IMPACT) * pressure_mult * risk_mult
    return clamp(score * rng.uniform(*CHALLENGE_RANDOM_RANGE))


def combined_score(challenge: float, runway: float) -> float:
    """Ranking score used for placements."""
    return challenge * CHALLENGE_SHARE + runway * RUNWAY_SHARE


def pressure_adjustment(queen: Queen, bottom_count: int) -> float:
    """Lip sync shift from previous trips to the bottom.

    Resilient queens (>= 8) rise to the occasion, fragile ones (<= 4) crack,
    everyone in between is unaffected.
    """
    if bottom_count <= 0:
        return 0.0
    if queen.conflict_resilience >= RESILIENT_THRESHOLD:
        return min(bottom_count * RESILIENT_BONUS_PER_BOTTOM, RESILIENT_BONUS_CAP)
    if queen.conflict_resilience <= FRAGILE_THRESHOLD:
        return -min(bottom_count * FRAGILE_PENALTY_PER_BOTTOM, FRAGILE_PENALTY_CAP)
    return 0.0


def lip_sync_score(
    queen: Queen,
    bottom_count: int,
    morale: float,
    rng: RandomSource,
) -> float:
    base = queen.weighted_sum(LIP_SYNC_WEIGHTS)
    morale_term = morale * (queen.adaptability / 10)
    total = base + pressure_adjustment(queen, bottom_count) + morale_term
    return clamp(total * rng.uniform(*LIP_SYNC_RANDOM_RANGE))


def production_bias(win_count: int, bottom_count: int, finale: bool = False) -> float:
    """Additive lip sync edge for queens with a strong track record."""
    bias = (win_count * BIAS_WIN_WEIGHT - bottom_count * BIAS_BOTTOM_WEIGHT) * BIAS_FACTOR
    if finale:
        bias += win_count * FINALE_WIN_BONUS
    return bias
