"""Constants and configuration values for the GUID helper bot."""
import uuid

# Legacy ids are embedded into this GUID by overwriting its first group.
# Any GUID sharing its last 12 bytes came from the old integer key space.
BASE_TEMPLATE = uuid.UUID("00000000-ae86-4653-9db8-f6bdacd094e5")
BASE_TEMPLATE_SUFFIX = "-ae86-4653-9db8-f6bdacd094e5"

GUID_BYTE_LENGTH = 16
LEGACY_ID_BYTE_LENGTH = 4
LEGACY_ID_MIN = -(2 ** 31)
LEGACY_ID_MAX = 2 ** 31 - 1

# Detection patterns
BASE64_ALPHABET = "A-Za-z0-9+/"
BASE64_MIN_RUN = 16
BASE64_PADDING = "=="

START_COMMAND = "/start"
HELP_MESSAGE = (
    "Hello! Send a binary formatted id to me and I return you a guid representation!\n"
    "For example: KQAAAIauU0aduPa9rNCU5Q== or KQAAAIauU0aduPa9rNCU5Q"
)

# MongoDB shell literals (subtype 3 is the legacy C# GUID representation)
BINDATA_TEMPLATE = 'BinData(3, "{base64}")'
QUERY_TEMPLATE = "{{ {field}: {bindata} }}"
DEFAULT_QUERY_FIELD = "_id"
