"""Calorie and macro estimates from profile data.

Uses the revised Harris-Benedict BMR equation with a fixed "moderately
active" multiplier, then adjusts for the stated goal.
"""

from diet_manager.domain.nutrition import MacroTargets, round_whole
from diet_manager.domain.profiles import Goal, Profile

MODERATELY_ACTIVE = 1.55
PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

_GOAL_ADJUSTMENTS = {
    Goal.LOSE_WEIGHT: -500,
    Goal.GAIN_WEIGHT: 300,
    Goal.BUILD_MUSCLE: 300,
}

# (protein, carbs, fats) share of calories
_MACRO_RATIOS = {
    Goal.LOSE_WEIGHT: (0.35, 0.35, 0.30),
    Goal.BUILD_MUSCLE: (0.30, 0.45, 0.25),
}
_DEFAULT_MACRO_RATIOS = (0.25, 0.50, 0.25)


def basal_metabolic_rate(
    weight_kg: float, height_cm: float, age_years: float, sex: str = "male"
) -> float:
    """Return BMR in kcal/day. Any sex other than "male" uses the female form."""
    if sex == "male":
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age_years
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age_years


def estimate_daily_calories(
    profile: Profile,
    sex: str = "male",
    activity_multiplier: float = MODERATELY_ACTIVE,
) -> int:
    """Return the goal-adjusted daily energy target in kcal.

    The profile must carry age, height and weight; callers validate that.
    """
    bmr = basal_metabolic_rate(
        float(profile.weight), float(profile.height), float(profile.age), sex
    )
    tdee = bmr * activity_multiplier
    tdee += _GOAL_ADJUSTMENTS.get(profile.goal, 0)
    return round_whole(tdee)


def estimate_macros(calories: float, goal: Goal | None) -> MacroTargets:
    """Split a calorie target into protein, carb and fat grams."""
    protein_ratio, carbs_ratio, fat_ratio = _MACRO_RATIOS.get(
        goal, _DEFAULT_MACRO_RATIOS
    )
    return MacroTargets(
        protein_g=round_whole(calories * protein_ratio / PROTEIN_KCAL_PER_G),
        carbs_g=round_whole(calories * carbs_ratio / CARBS_KCAL_PER_G),
        fat_g=round_whole(calories * fat_ratio / FAT_KCAL_PER_G),
    )
