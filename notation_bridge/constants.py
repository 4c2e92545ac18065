from __future__ import annotations

APP_NAME = "Notation Bridge"
BRIDGE_HOST = "127.0.0.1"
BRIDGE_PORT = 8765

LOG_PREVIEW_CHARS = 200
CONTENT_PREVIEW_CHARS = 50

MIN_TEXT_LENGTH = 50

DEFAULT_TEMPO = 120
DEFAULT_TIME_SIG = "4/4"
DEFAULT_KEY = "C"

STEPS_PER_WHOLE = 16
DEFAULT_SUBDIVISIONS = 16

VELOCITY_MIN = 1
VELOCITY_MAX = 127
PERCENT_MIN = 0
PERCENT_MAX = 100

MIN_COMPRESSION_RUN = 3

REST_SYMBOL = "."
SUSTAIN_SYMBOL = "~"
NOTE_SYMBOL = "X"
