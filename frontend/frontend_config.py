import os

# API base used by frontend. Can be overridden by setting API_URL env var.
API_BASE = os.getenv("API_URL", "http://localhost:8000")

# Client-side upload limit, checked before the file is sent to the API.
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 10 * 1024 * 1024))  # 10 MB default

# Timeout (seconds) for regular API requests.
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# How often (seconds) the file list checks for lifecycle events.
EVENT_POLL_SECONDS = float(os.getenv("EVENT_POLL_SECONDS", "2"))

# Seconds to wait before reconnecting a dropped event stream.
EVENT_RECONNECT_SECONDS = float(os.getenv("EVENT_RECONNECT_SECONDS", "3"))

FILE_INPUT_HELP = (
    "Please upload a csv file, where the first row is the header. "
    "And the values are comma(,) separated."
)
