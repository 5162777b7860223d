"""Shared enums for models and API."""

from enum import Enum


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class TokenPurpose(str, Enum):
    """What an issued token may be used for."""

    ACCESS = "access"
    PASSWORD_RESET = "password_reset"


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class ExerciseCategory(str, Enum):
    """Catalog tabs: everything, exercises with equipment, exercises with muscle groups."""

    ALL = "all"
    EQUIPMENT = "equipment"
    MUSCLE = "muscle"


class ExerciseSort(str, Enum):
    DEFAULT = "default"
    A_Z = "a-z"
    Z_A = "z-a"


class AdjustmentAction(str, Enum):
    """Direction of a weight adjustment suggested after an exercise."""

    INCREASE = "increase"
    MAINTAIN = "maintain"
    DECREASE = "decrease"
