import os
import re
from pathlib import Path

# HTTP identity and base endpoints
HEADERS = {"User-Agent": "PlanetAtlas/1.0 (catalog crawler)", "Accept": "application/json"}
DEFAULT_BASE_URL = "https://swapi.dev/api/planets/"
BASE_URL = os.environ.get("PLANETS_BASE_URL", DEFAULT_BASE_URL)

# Fetch tuning knobs
API_TIMEOUT = 30  # Seconds per HTTP request
MAX_IN_FLIGHT = 16  # Concurrent requests per client

# Payload schemas
SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
PAGE_SCHEMA_FILE = SCHEMA_DIR / "planet_page.schema.json"
RESIDENT_SCHEMA_FILE = SCHEMA_DIR / "resident.schema.json"

# Normalization sentinels
UNKNOWN_POPULATION = "unknown"
UNKNOWN_DIAMETER = "unknown"
NO_RESIDENTS_PLACEHOLDER = "No notable residents"
UNKNOWN_RESIDENT_PLACEHOLDER = "Unknown Resident"
INTEGER_PATTERN = re.compile(r"^\d+$")

# Display formats
EDITED_DISPLAY_FORMAT = "%d %b %Y, %H:%M:%S UTC"

# Run logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
