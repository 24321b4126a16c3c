"""
Dashboard configuration.
All settings come from environment variables; a local .env file is loaded first.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Debug flag enables API docs and verbose diagnostics
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Agent control channel (mission briefs, apply_proposal actions)
AGENT_CONTROL_URL = os.getenv("AGENT_CONTROL_URL")  # unset means channel not ready
AGENT_CONTROL_TIMEOUT_SEC = float(os.getenv("AGENT_CONTROL_TIMEOUT_SEC", "30"))
AGENT_CONTROL_TOKEN = os.getenv("AGENT_CONTROL_TOKEN")

# API surface
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def get_agent_channel():
    """Get configured agent control channel. Returns None if no channel URL is set."""
    if not AGENT_CONTROL_URL:
        return None

    from ..agents.channel import HttpAgentControlChannel
    return HttpAgentControlChannel(
        base_url=AGENT_CONTROL_URL,
        timeout=AGENT_CONTROL_TIMEOUT_SEC,
        token=AGENT_CONTROL_TOKEN,
    )


def validate_config():
    """Validate dashboard configuration and return any issues."""
    issues = []

    if AGENT_CONTROL_URL and not AGENT_CONTROL_URL.startswith(("http://", "https://")):
        issues.append(f"Invalid AGENT_CONTROL_URL: {AGENT_CONTROL_URL}")

    if AGENT_CONTROL_TIMEOUT_SEC <= 0:
        issues.append("AGENT_CONTROL_TIMEOUT_SEC must be > 0")

    if LOG_LEVEL not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        issues.append(f"Invalid LOG_LEVEL: {LOG_LEVEL}")

    return issues
