"""Internal constants shared across the library."""

SERVICE_URL = "http://127.0.0.1:8911"
USER_AGENT = "pytuner"

# Durable blob identifiers.
PREFERENCES_KEY = "preferences"
PROFILES_KEY = "profiles"

# ------------------------------------------------------------------
# Voltage step scale  (step → millivolts)
# ------------------------------------------------------------------

VOLTAGE_STEP_MV = 12.5
VOLTAGE_BASE_MV = 600.0
VOLTAGE_WINDOW = 2


def step_to_millivolts(step: int) -> float:
    """Convert a voltage step index to millivolts (``step * 12.5 + 600``)."""
    return step * VOLTAGE_STEP_MV + VOLTAGE_BASE_MV


def format_millivolts(millivolts: float) -> str:
    """Render millivolts the way choice lists show them (``"737.5 mV"``, ``"750 mV"``)."""
    return f"{millivolts:g} mV"


# ------------------------------------------------------------------
# Compressed swap encodings stored in preferences
# ------------------------------------------------------------------

COMPCACHE_UNSUPPORTED = "unsupported"
COMPCACHE_OFF = "off"
COMPCACHE_ON = "on"
