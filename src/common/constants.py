"""Shared constants for howold.

For environment-based configuration (token, API URL, etc.), use the env module:
    from common.env import env
    token = env.github_token()
"""

VERSION = "1.0.0"

# GitHub REST API
DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
USER_AGENT = f"howold/{VERSION}"
REQUEST_TIMEOUT = 30  # seconds, per request
PER_PAGE = 100  # maximum allowed by GitHub

# Retry policy
MAX_ATTEMPTS = 3  # single-resource requests
RETRY_BASE_DELAY = 2  # seconds, doubled per attempt
PAGE_RETRY_DELAY = 60  # seconds, per throttled page
MAX_PAGINATION_WAIT = 900  # seconds, total per paginated fetch

# Discovery
DEFAULT_MARKER = "package.json"
ROOT_DIRECTORY = "."
BATCH_SIZE = 50

# Remaining requests below which a low-quota warning is shown
LOW_QUOTA_THRESHOLD = 100
