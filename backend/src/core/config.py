import os

# Resolve UPLOAD_DIR to an absolute path, defaulting to backend/uploads
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
UPLOAD_DIR = os.path.abspath(os.getenv("UPLOAD_DIR") or os.path.join(_BACKEND_DIR, "uploads"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
BACKEND_LOG_FILE = os.getenv("BACKEND_LOG_FILE")

# Seconds of silence on /api/events before a keep-alive comment is sent
EVENT_KEEPALIVE_SECONDS = float(os.getenv("EVENT_KEEPALIVE_SECONDS", "15"))

# Pending events held per connected subscriber before new ones are dropped
SUBSCRIBER_QUEUE_SIZE = int(os.getenv("SUBSCRIBER_QUEUE_SIZE", "100"))

# Event-kind labels used on the wire
EVENT_LABELS = {
    "uploaded": "fileUploaded",
    "deleted": "fileDeleted",
}
