"""Enums for profile fields."""

from enum import Enum


class Gender(str, Enum):
    """User gender enum."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Physical activity level enum."""
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class DoshaType(str, Enum):
    """Ayurvedic constitution enum."""
    VATA = "vata"
    PITTA = "pitta"
    KAPHA = "kapha"
    VATA_PITTA = "vata-pitta"
    PITTA_KAPHA = "pitta-kapha"
    VATA_KAPHA = "vata-kapha"
    TRIDOSHIC = "tridoshic"


class FoodPreference(str, Enum):
    """Food preference enum."""
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non-vegetarian"
    PESCATARIAN = "pescatarian"


class WorkingHoursPreference(str, Enum):
    """Preferred working hours enum."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    FLEXIBLE = "flexible"


class PhysicalGoal(str, Enum):
    """Physical goal enum."""
    SPEED = "speed"
    FLEXIBILITY = "flexibility"
    STRENGTH = "strength"


class GoalSpeed(str, Enum):
    """How quickly the user wants to reach their goals."""
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"
