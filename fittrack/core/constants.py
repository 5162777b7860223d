"""Application constants."""

# Plan exercise defaults (applied when a field is omitted)
DEFAULT_SETS = 3
DEFAULT_REPS = "10-12"
DEFAULT_REST_SECONDS = 60
DEFAULT_WEIGHT = 0.0

MIN_PASSWORD_LENGTH = 6

# Difficulty ratings: 0 = not rated, 1..5 = very easy .. very difficult
MIN_RATING = 0
MAX_RATING = 5

# Average-rating thresholds driving feedback and recommendations
EASY_RATING_THRESHOLD = 1.5
HARD_RATING_THRESHOLD = 3.5
WEIGHT_INCREASE_FACTOR = 1.1
WEIGHT_DECREASE_FACTOR = 0.9

FITNESS_GOALS = (
    "Lose Weight",
    "Build Muscle",
    "Improve Strength",
    "Improve Endurance",
    "Improve Flexibility",
    "Maintain Fitness",
    "Rehabilitation",
    "Sports Performance",
)

# Filter options offered when the catalog has none of its own
DEFAULT_MUSCLE_GROUPS = (
    "Chest",
    "Back",
    "Shoulders",
    "Biceps",
    "Triceps",
    "Legs",
    "Abs",
    "Glutes",
    "Forearms",
    "Calves",
)
DEFAULT_EQUIPMENT = (
    "Barbell",
    "Dumbbell",
    "Kettlebell",
    "Cable",
    "Machine",
    "Bodyweight",
    "Resistance Band",
    "Medicine Ball",
)
