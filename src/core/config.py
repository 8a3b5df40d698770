"""Server settings. Defaults can be overridden through environment variables."""

import os

HOST = os.getenv("DUEL_HOST", "0.0.0.0")
PORT = int(os.getenv("DUEL_PORT", "9000"))
LOG_LEVEL = os.getenv("DUEL_LOG_LEVEL", "INFO").upper()
WEBSOCKET_PATH = os.getenv("DUEL_WS_PATH", "/")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# messages that may wait for a single client before it is dropped
OUTBOX_SIZE = int(os.getenv("DUEL_OUTBOX_SIZE", "256"))
