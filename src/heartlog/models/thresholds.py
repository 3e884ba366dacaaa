"""Clinical thresholds used for validation and patient alerts.

All values are in pounds, beats per minute, percent or mmHg.
"""

# Weight alerts (lbs)
WEIGHT_GAIN_24H = 2.0
WEIGHT_GAIN_7D = 5.0
WEIGHT_BASELINE_DAYS = 7

# Weight validation bounds (lbs, inclusive)
MIN_WEIGHT = 50.0
MAX_WEIGHT = 500.0

# Changes smaller than this are treated as normal daily fluctuation
WEIGHT_STABILITY = 0.05

# Trend charts treat anything within this as "no change"
TREND_CHANGE_TOLERANCE = 0.1

# Heart rate alerts (bpm)
HEART_RATE_LOW = 40
HEART_RATE_HIGH = 120
PERSISTENT_READING_COUNT = 3
HEART_RATE_HISTORY_DAYS = 7

# Heart rate validation bounds (bpm)
MIN_HEART_RATE = 30
MAX_HEART_RATE = 250

# Symptoms
SEVERE_SYMPTOM = 4
DIZZINESS_BP_PROMPT = 3
BLOOD_PRESSURE_LOOKBACK_HOURS = 24

# Vital sign alerts
OXYGEN_SATURATION_LOW = 90
SYSTOLIC_BP_LOW = 90
MAP_LOW = 60

# Vital sign validation bounds
MIN_OXYGEN_SATURATION = 70
MAX_OXYGEN_SATURATION = 100
MIN_SYSTOLIC_BP = 60
MAX_SYSTOLIC_BP = 250
MIN_DIASTOLIC_BP = 40
MAX_DIASTOLIC_BP = 150

# Reporting window (days, inclusive of today)
TREND_WINDOW_DAYS = 30
