"""Enumerations and planning constants for the race planner.

Per-value parameters (race distance tables, run-type weights) are plain
lookup dicts keyed by enum member, never mutated at runtime.
"""

from enum import IntEnum, auto


class RaceDistance(IntEnum):
    """Supported goal race distances."""

    FIVE_K = auto()
    TEN_K = auto()
    HALF_MARATHON = auto()
    MARATHON = auto()
    CUSTOM = auto()

    @property
    def display_name(self) -> str:
        return RACE_DISPLAY_NAMES[self]

    @property
    def distance_in_miles(self) -> float:
        return RACE_DISTANCE_MILES[self]

    @property
    def typical_taper_weeks(self) -> int:
        return RACE_TAPER_WEEKS[self]

    @property
    def peak_weeks(self) -> int:
        return RACE_PEAK_WEEKS[self]

    @property
    def long_run_cap_fraction(self) -> float:
        """Fraction of race distance a single long run may reach."""
        return RACE_LONG_RUN_CAP_FRACTION[self]

    @property
    def minimum_weeks_needed(self) -> int:
        """Minimum weeks needed to safely train for this distance."""
        return RACE_MINIMUM_WEEKS[self]

    @property
    def long_run_cap(self) -> float:
        """Longest long run allowed at generation time, in miles."""
        return self.distance_in_miles * self.long_run_cap_fraction

    @classmethod
    def from_name(cls, name: str) -> "RaceDistance":
        """Parse a member name case-insensitively (``"half_marathon"``, ``"5k"``)."""
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        key = _RACE_ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown race distance: {name!r}") from None


class RunType(IntEnum):
    """Types of training runs in a race plan."""

    RECOVERY = auto()
    BASE = auto()
    LONG_RUN = auto()
    SPEED_WORK = auto()
    TEMPO = auto()
    CROSS_TRAINING = auto()
    REST = auto()

    @property
    def display_name(self) -> str:
        return RUN_DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return RUN_ICONS[self]

    @property
    def effort_description(self) -> str:
        return RUN_EFFORT_DESCRIPTIONS[self]

    @property
    def counts_as_mileage(self) -> bool:
        """Whether this run type contributes to weekly mileage."""
        return self not in (RunType.REST, RunType.CROSS_TRAINING)

    @property
    def intensity_factor(self) -> float:
        return RUN_INTENSITY_FACTOR[self]

    @property
    def mileage_weight(self) -> float:
        """Relative share of weekly volume this run type receives."""
        return RUN_MILEAGE_WEIGHTS[self]


class TrainingPhase(IntEnum):
    """Backwards-planned macrocycle phases, in chronological order."""

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    TAPER = auto()

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def description(self) -> str:
        return PHASE_DESCRIPTIONS[self]


class TrainingStatus(IntEnum):
    """Coarse adherence classification derived from the compliance score."""

    ON_TRACK = auto()
    STRUGGLING = auto()
    CRUSHING_IT = auto()

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


# ---------------------------------------------------------------------------
# Race distance tables
# ---------------------------------------------------------------------------
RACE_DISPLAY_NAMES = {
    RaceDistance.FIVE_K: "5K",
    RaceDistance.TEN_K: "10K",
    RaceDistance.HALF_MARATHON: "Half Marathon",
    RaceDistance.MARATHON: "Marathon",
    RaceDistance.CUSTOM: "Custom",
}

RACE_DISTANCE_MILES = {
    RaceDistance.FIVE_K: 3.1,
    RaceDistance.TEN_K: 6.2,
    RaceDistance.HALF_MARATHON: 13.1,
    RaceDistance.MARATHON: 26.2,
    RaceDistance.CUSTOM: 10.0,
}

RACE_TAPER_WEEKS = {
    RaceDistance.FIVE_K: 1,
    RaceDistance.TEN_K: 1,
    RaceDistance.HALF_MARATHON: 2,
    RaceDistance.MARATHON: 3,
    RaceDistance.CUSTOM: 2,
}

RACE_PEAK_WEEKS = {
    RaceDistance.FIVE_K: 2,
    RaceDistance.TEN_K: 2,
    RaceDistance.HALF_MARATHON: 3,
    RaceDistance.MARATHON: 3,
    RaceDistance.CUSTOM: 2,
}

# Short races allow long runs well beyond race distance
RACE_LONG_RUN_CAP_FRACTION = {
    RaceDistance.FIVE_K: 1.5,
    RaceDistance.TEN_K: 1.3,
    RaceDistance.HALF_MARATHON: 0.85,
    RaceDistance.MARATHON: 0.75,
    RaceDistance.CUSTOM: 1.0,
}

RACE_MINIMUM_WEEKS = {
    RaceDistance.FIVE_K: 6,
    RaceDistance.TEN_K: 8,
    RaceDistance.HALF_MARATHON: 12,
    RaceDistance.MARATHON: 16,
    RaceDistance.CUSTOM: 8,
}

_RACE_ALIASES = {
    "5K": "FIVE_K",
    "10K": "TEN_K",
    "HALF": "HALF_MARATHON",
    "FULL": "MARATHON",
}

# ---------------------------------------------------------------------------
# Run type tables
# ---------------------------------------------------------------------------
RUN_DISPLAY_NAMES = {
    RunType.RECOVERY: "Recovery",
    RunType.BASE: "Base Run",
    RunType.LONG_RUN: "Long Run",
    RunType.SPEED_WORK: "Speed Work",
    RunType.TEMPO: "Tempo Run",
    RunType.CROSS_TRAINING: "Cross Training",
    RunType.REST: "Rest Day",
}

RUN_ICONS = {
    RunType.RECOVERY: "leaf.fill",
    RunType.BASE: "figure.run",
    RunType.LONG_RUN: "road.lanes",
    RunType.SPEED_WORK: "bolt.fill",
    RunType.TEMPO: "gauge.with.dots.needle.67percent",
    RunType.CROSS_TRAINING: "figure.strengthtraining.traditional",
    RunType.REST: "bed.double.fill",
}

RUN_EFFORT_DESCRIPTIONS = {
    RunType.RECOVERY: "Easy pace, conversational. Let your body rebuild.",
    RunType.BASE: "Comfortable pace. The foundation of endurance.",
    RunType.LONG_RUN: "Steady pace, building distance. Your endurance builder.",
    RunType.SPEED_WORK: "Intervals at high intensity. Builds speed and VO2 max.",
    RunType.TEMPO: "Comfortably hard. Sustained effort below race pace.",
    RunType.CROSS_TRAINING: "Strength, cycling, or swimming. Active recovery.",
    RunType.REST: "Full rest. Your body adapts and grows stronger.",
}

RUN_INTENSITY_FACTOR = {
    RunType.REST: 0.0,
    RunType.RECOVERY: 0.3,
    RunType.CROSS_TRAINING: 0.4,
    RunType.BASE: 0.5,
    RunType.LONG_RUN: 0.6,
    RunType.TEMPO: 0.75,
    RunType.SPEED_WORK: 0.85,
}

RUN_MILEAGE_WEIGHTS = {
    RunType.LONG_RUN: 0.30,
    RunType.TEMPO: 0.20,
    RunType.SPEED_WORK: 0.15,
    RunType.BASE: 0.20,
    RunType.RECOVERY: 0.10,
    RunType.CROSS_TRAINING: 0.0,
    RunType.REST: 0.0,
}

PHASE_DESCRIPTIONS = {
    TrainingPhase.BASE: "Building your aerobic foundation at a comfortable level.",
    TrainingPhase.BUILD: "Progressively increasing mileage by ~10% per week.",
    TrainingPhase.PEAK: "Highest training volume. Your longest runs happen here.",
    TrainingPhase.TAPER: "Reducing volume to arrive at race day fresh and ready.",
}

STATUS_LABELS = {
    TrainingStatus.ON_TRACK: "On Track",
    TrainingStatus.STRUGGLING: "Needs Attention",
    TrainingStatus.CRUSHING_IT: "Crushing It",
}

# ---------------------------------------------------------------------------
# Plan generation constants
# ---------------------------------------------------------------------------
# Shortest horizon for which a calendar is generated
MIN_PLAN_WEEKS = 2
DAYS_PER_WEEK = 7

# Build/peak weeks split of the non-taper, non-peak remainder
BUILD_SHARE_NUMERATOR = 2
BUILD_SHARE_DENOMINATOR = 3

# Base weeks never drop below half the race distance per week
BASE_MIN_RACE_FRACTION = 0.5

# Compounding weekly growth during build (~10% rule)
WEEKLY_GROWTH_RATE = 1.10

# Taper volume as a fraction of peak, by taper week; clamped to the last value
TAPER_FRACTIONS = (0.75, 0.50, 0.30)

# Distances are prescribed in quarter-mile steps
DISTANCE_ROUNDING_STEPS_PER_MILE = 4

# ---------------------------------------------------------------------------
# Adaptation constants
# ---------------------------------------------------------------------------
OVERACHIEVE_RATIO = 1.20
UNDERACHIEVE_RATIO = 0.80
HARD_EFFORT = 3
DEFAULT_PERCEIVED_EFFORT = 2
LONG_RUN_BOOST_FACTOR = 1.05
OVERACHIEVE_LOOKAHEAD = 5

MISSED_VOLUME_SHARE = 0.8
# Fixed divisor: under-redistributes when fewer sessions are available
MISSED_VOLUME_DIVISOR = 3
UNDERACHIEVE_LOOKAHEAD = 10
UNDERACHIEVE_MAX_SESSIONS = 3

# Weekly missed-volume sweep, each addition capped relative to the receiving session
MISSED_SWEEP_WINDOW_DAYS = 7
MISSED_SWEEP_MAX_INCREASE_PCT = 0.15

# ---------------------------------------------------------------------------
# Pre-run check-in constants
# ---------------------------------------------------------------------------
FEELING_GOOD_THRESHOLD = 0.7
FEELING_TIRED_THRESHOLD = 0.3
FEELING_MAX_REDUCTION = 0.2
FEELING_VERY_TIRED_FACTOR = 0.5
PRE_RUN_REDISTRIBUTION_THRESHOLD = 0.25
PRE_RUN_LOOKAHEAD = 5
PRE_RUN_MAX_SESSIONS = 2

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------
COMPLIANCE_WINDOW_DAYS = 7
OVERPERFORMANCE_CAP = 1.5
NEUTRAL_SCORE = 0.5
CONFIDENCE_COMPLETION_WEIGHT = 0.5
CONFIDENCE_ACCURACY_WEIGHT = 0.3
CONFIDENCE_PROGRESS_WEIGHT = 0.2

STATUS_CRUSHING_IT_THRESHOLD = 0.85
STATUS_ON_TRACK_THRESHOLD = 0.6

# Coach summary when a run clearly beats its target at a comfortable effort
CRUSHING_IT_RATIO = 1.15
