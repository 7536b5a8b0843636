import os


DATABASE_URL = os.getenv("SHAREIT_DATABASE_URL", "sqlite:///./data/shareit.db")
LOG_LEVEL = os.getenv("SHAREIT_LOG_LEVEL", "DEBUG").upper()

# Identity of the caller, set by the gateway in front of the service
USER_ID_HEADER = "X-Sharer-User-Id"

DEFAULT_PAGE_FROM = 0
DEFAULT_PAGE_SIZE = 10
