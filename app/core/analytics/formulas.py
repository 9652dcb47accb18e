import math
from typing import Union

Number = Union[int, float]

MALE = "male"
SEX_CODE_MALE = 0
SEX_CODE_FEMALE = 1


def is_male(sex: str) -> bool:
    """Case-insensitive match on "male". Anything else counts as female."""
    return (sex or "").lower() == MALE


def sex_code(sex: str) -> int:
    return SEX_CODE_MALE if is_male(sex) else SEX_CODE_FEMALE


def compute_bmr(weight_kg: Number, height_cm: Number, age_years: Number, sex: str) -> float:
    """Basal metabolic rate using the Mifflin-St Jeor equation.

    Args:
        weight_kg: body weight in kilograms
        height_cm: height in centimetres
        age_years: age in whole years
        sex: "male" selects the +5 offset, every other value the -161 offset
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return float(base + 5 if is_male(sex) else base - 161)


def compute_tdee(weight_kg: Number, height_cm: Number, age_years: Number, sex: str,
                 activity: Number = 1.2) -> float:
    """Total daily energy expenditure: BMR scaled by the activity multiplier."""
    return compute_bmr(weight_kg, height_cm, age_years, sex) * activity


def compute_one_rep_max(weight: Number, reps: Number) -> float:
    """Epley estimate: weight * (1 + reps / 30). reps may be fractional."""
    return weight * (1 + reps / 30.0)


def is_finite(value: Number) -> bool:
    return math.isfinite(value)


def round_kcal(value: float) -> int:
    # half rounds up (2797.5 -> 2798), unlike round() which rounds half to even
    if not math.isfinite(value):
        raise ValueError(f"cannot round non-finite energy value: {value}")
    return int(math.floor(value + 0.5))


def clamp_limit(limit: int, lower: int = 1, upper: int = 500) -> int:
    return min(max(limit, lower), upper)
