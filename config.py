"""
Application Configuration

This file contains the configuration settings for the Nougat Page Selector.
Values that depend on the machine (endpoint, timeouts, log level) can be
overridden from the environment or a .env file.
"""

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

# --- Application Metadata ---
APP_NAME = "Nougat Page Selector"
APP_VERSION = "0.1.0"

# --- Processing Endpoint ---
# The local Nougat API server that receives the selected page range.
NOUGAT_ENDPOINT = os.getenv("NOUGAT_ENDPOINT", "http://127.0.0.1:8503/predict/")

# Seconds to wait for the endpoint. Unset means wait as long as the server takes.
_timeout = os.getenv("NOUGAT_TIMEOUT")
SUBMISSION_TIMEOUT = float(_timeout) if _timeout else None

# --- Rendering ---
# Zoom factor relative to 72 dpi used for every page preview.
RENDER_SCALE = float(os.getenv("RENDER_SCALE", "1.5"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "page_selector_debug.log")

# --- UI Configuration ---
UI_SETTINGS = {
    "window_title": f"{APP_NAME} v{APP_VERSION}",
    "default_width": 900,
    "default_height": 1000,
    "confirm_label": "Send to Nougat",
}
