"""
Reference tables and fixed thresholds for thermal environment assessment.

Values follow the standard editions the engine implements:
- ISO 8996 / ISO 7243:2017 Table A.1: metabolic rate classes
- ISO 9920: clothing insulation presets
- ISO 7243:2017 Table B.2: clothing adjustment values (CAV)
- ISO 7730:2025 Table 1 and §6: comfort and local discomfort categories
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType


class MetabolicClass(IntEnum):
    """ISO 8996 / ISO 7243 metabolic rate class."""
    RESTING = 0
    LOW = 1
    MODERATE = 2
    HIGH = 3
    VERY_HIGH = 4


@dataclass(frozen=True)
class MetabolicRate:
    label: str
    rate: float  # W/m²
    example: str


@dataclass(frozen=True)
class ClothingPreset:
    label: str
    clo: float


@dataclass(frozen=True)
class ClothingAdjustment:
    label: str
    cav: float  # °C, added to WBGT


METABOLIC_CLASSES = MappingProxyType({
    MetabolicClass.RESTING: MetabolicRate(
        "Class 0 - Resting", 115.0, "Sitting at rest, sleeping"),
    MetabolicClass.LOW: MetabolicRate(
        "Class 1 - Low", 180.0, "Writing, light assembly, driving"),
    MetabolicClass.MODERATE: MetabolicRate(
        "Class 2 - Moderate", 300.0, "Walking 3.5 km/h, painting, cleaning"),
    MetabolicClass.HIGH: MetabolicRate(
        "Class 3 - High", 415.0, "Walking 5-7 km/h, digging, heavy lifting"),
    MetabolicClass.VERY_HIGH: MetabolicRate(
        "Class 4 - Very high", 520.0, "Walking > 7 km/h, chopping wood, heavy manual work"),
})

CLOTHING_PRESETS: tuple[ClothingPreset, ...] = (
    ClothingPreset("Nude (0.0 clo)", 0.0),
    ClothingPreset("Light summer clothing - shorts + T-shirt (0.3 clo)", 0.3),
    ClothingPreset("Light indoor clothing - trousers + shirt (0.5 clo)", 0.5),
    ClothingPreset("Office clothing - trousers + shirt + jacket (1.0 clo)", 1.0),
    ClothingPreset("Work clothing - coverall + underwear (1.5 clo)", 1.5),
    ClothingPreset("Winter clothing - sweater + thick trousers + coat (2.0 clo)", 2.0),
    ClothingPreset("Heavy protective clothing - insulated coverall (3.0 clo)", 3.0),
)

CAV_VALUES: tuple[ClothingAdjustment, ...] = (
    ClothingAdjustment("Standard work clothing (CAV = 0)", 0.0),
    ClothingAdjustment("White cotton coverall (CAV = 0)", 0.0),
    ClothingAdjustment("Clothing with limited vapour transport (CAV = +3)", 3.0),
    ClothingAdjustment("SMS polypropylene coverall (CAV = +0.5)", 0.5),
    ClothingAdjustment("Polyolefin coverall (CAV = +1)", 1.0),
    ClothingAdjustment("Double layer of clothing (CAV = +3)", 3.0),
    ClothingAdjustment("Vapour-impermeable coverall (CAV = +11)", 11.0),
    ClothingAdjustment("Sealed vapour-tight coverall (CAV = +12)", 12.0),
)

# Physical constants
CLO_TO_M2KW = 0.155        # 1 clo in m²·K/W
RESTING_HEAT_LOAD = 58.15  # W/m², 1 met
KELVIN_OFFSET = 273.0

# Humidity fallback when a measurement carries no RH reading
DEFAULT_VAPOUR_PRESSURE = 1333.0  # Pa

# PMV clothing-surface temperature solver
PMV_MAX_ITERATIONS = 200
PMV_TOLERANCE = 0.001  # °C

# Upper bounds (inclusive) of |PMV| for categories A, B, C
PMV_CATEGORY_LIMITS = (0.5, 0.7, 1.0)

# WBGT verdict: difference to the reference value
WBGT_ACCEPTABLE_MARGIN = -2.0
WBGT_CAUTION_MARGIN = 0.0

# Simplified PHS
PHS_MIN_EVAPORATION = 5.0            # W/m², below this no meaningful sweating
PHS_SWEAT_CONVERSION = 1.47          # g/(h·m²) per W/m²
PHS_BODY_SURFACE = 1.8               # m²
PHS_SWEAT_EFFICIENCY = 0.95
PHS_SWMAX_ACCLIMATIZED = 800         # g/h
PHS_SWMAX_UNACCLIMATIZED = 400       # g/h
PHS_CORE_TEMPERATURE_RISE = 1.0      # K
PHS_BODY_MASS = 70.0                 # kg
PHS_BODY_SPECIFIC_HEAT = 3640.0      # J/(kg·K)
PHS_MIN_DLIM = 15                    # min
PHS_DANGER_DLIM = 60                 # min

# IREQ
IREQ_UNBOUNDED = 10.0        # clo, returned for a vanishing net heat load
IREQ_MIN_DENOMINATOR = 0.5
IREQ_CRITICAL_DLIM = 30      # min, used when available insulation < IREQmin

# Local discomfort
DEFAULT_TURBULENCE_INTENSITY = 40.0  # %, mechanical ventilation
DRAUGHT_THRESHOLD_VELOCITY = 0.05    # m/s
DR_CATEGORY_LIMITS = (10.0, 20.0, 30.0)          # inclusive upper bounds, %
VERTICAL_GRADIENT_LIMITS = (2.0, 3.0, 4.0)       # strict upper bounds, K
FLOOR_TEMPERATURE_RANGE = (19.0, 29.0)           # °C, acceptable
FLOOR_TEMPERATURE_COMFORT_RANGE = (22.0, 28.0)   # °C, category A
RADIANT_ASYMMETRY_LIMITS = MappingProxyType({    # strict upper bounds, K
    "warm_ceiling": (5.0, 10.0, 14.0),
    "cold_wall": (10.0, 16.0, 23.0),
    "warm_window": (10.0, 23.0, 35.0),
})
