"""Package-wide constants."""

PACKAGE_VERSION = "1.0.0"

SUMMARY_LIMIT = 450
ELLIPSIS = "..."
UNKNOWN_PATH = "unknown"
DEFAULT_MAX_ANNOTATIONS = 100
ANNOTATION_TYPE = "ISSUE"
REPORT_TYPE = "SECURITY"
DEFAULT_REPORTER = "sarifbridge"
BITBUCKET_API_URL = "https://api.bitbucket.org/2.0/repositories"
ANNOTATION_BATCH_SIZE = 100
