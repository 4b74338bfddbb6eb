"""Constants shared across gh-installer modules."""

from datetime import timedelta

# Project
PROJECT_HOME_URL = "https://github.com/jpillora/installer"
CONFIG_DIR_ENV = "INSTALLER_CONFIG_DIR"
KEYRING_SERVICE = "gh-installer"
KEYRING_USERNAME = "github-token"

# Server defaults
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 3000
DEFAULT_USER = "jpillora"

# Query defaults
ALIASED_PROGRAMS = {"micro": "zyedidia"}

# Upstream
GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"
SEARCH_URL = "https://www.google.com/search"
SEARCH_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)
RATE_LIMIT_WARNING_THRESHOLD = 10

# Cache
CACHE_TTL = timedelta(hours=1)

# Assets
RAW_BINARY_MIN_SIZE = 1024 * 1024
SUPPORTED_FILE_TYPES = frozenset(
    {
        ".bin",
        ".zip",
        ".tar.bz",
        ".tar.bz2",
        ".bz2",
        ".gz",
        ".tar.gz",
        ".tgz",
    }
)

# Response formats: name -> (content type, extension, template)
FORMAT_SCRIPT = "script"
FORMAT_RUBY = "ruby"
FORMAT_HOMEBREW = "homebrew"
FORMAT_TEXT = "text"
RESPONSE_FORMATS = {
    FORMAT_SCRIPT: ("text/x-shellscript", "sh", "install.sh.j2"),
    FORMAT_HOMEBREW: ("text/ruby", "rb", "install.rb.j2"),
    FORMAT_RUBY: ("text/ruby", "rb", "install.rb.j2"),
    FORMAT_TEXT: ("text/plain", "txt", "install.txt.j2"),
}

# Logging
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL = "INFO"
LOG_ROTATION_THRESHOLD_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5
LOG_CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_CONSOLE_DATE_FORMAT = "%H:%M:%S"
LOG_FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}
