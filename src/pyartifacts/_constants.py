"""Internal constants shared across the library."""

BASE_URL = "https://intel.ingress.com"
USER_AGENT = "pyartifacts/0 (+aiohttp)"

ARTIFACT_PORTALS_ACTION = "getArtifactPortals"
ARTIFACTS_UPDATED_HOOK = "artifactsUpdated"

# ------------------------------------------------------------------
# Refresh timing (seconds)
# ------------------------------------------------------------------

REFRESH_JITTER = 2 * 60
REFRESH_SUCCESS = 60 * 60
REFRESH_FAILURE = 2 * 60
INITIAL_DELAY = 0.001

# ------------------------------------------------------------------
# Portal summary array layout
# ------------------------------------------------------------------

PORTAL_TYPE_MARKER = "p"
IDX_LAT_E6 = 2
IDX_LNG_E6 = 3
IDX_TITLE = 8
IDX_ARTIFACT_BRIEF = 12
IDX_TIMESTAMP = 13
CORE_PORTAL_DATA_LENGTH = 4

# ------------------------------------------------------------------
# Marker artwork
# ------------------------------------------------------------------

MARKER_IMAGE_BASE = "//commondatastorage.googleapis.com/ingress.com/img/map_icons/marker_images/"
TARGET_ICON_SIZE = 100 / 2
TARGET_OPACITY = 1.0
FRAGMENT_ICON_SIZE = 60 / 2
FRAGMENT_OPACITY = 0.6
