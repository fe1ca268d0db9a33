"""Startup configuration.

Reads the process environment once at startup; the server loads .env
before calling in. Invalid values cause a clear startup failure rather than a confusing
mid-call surprise.
"""

import logging
import os
import sys
from dataclasses import dataclass

logger = logging.getLogger(__name__)

OPTIONAL_VARS = [
    "NOVACALL_ASSISTANT_NAME",
    "NOVACALL_PRINCIPAL_NAME",
    "LOG_LEVEL",
    "PORT",
]

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    assistant_name: str = "Nova"
    principal_name: str = "Manohar Kumar Sah"
    log_level: str = "INFO"
    port: int = 8765


def validate_config() -> None:
    """Validate environment variables at startup.

    Exits the process with a clear error if a set variable has an unusable
    value. Logs warnings for missing optional variables.
    """
    problems = []

    level = os.getenv("LOG_LEVEL")
    if level and level.upper() not in LOG_LEVELS:
        problems.append(f"LOG_LEVEL={level!r} (expected one of {', '.join(sorted(LOG_LEVELS))})")

    port = os.getenv("PORT")
    if port and not port.isdigit():
        problems.append(f"PORT={port!r} (expected an integer)")

    for var in ("NOVACALL_ASSISTANT_NAME", "NOVACALL_PRINCIPAL_NAME"):
        value = os.getenv(var)
        if value is not None and not value.strip():
            problems.append(f"{var} is set but empty")

    if problems:
        print(
            f"\nFATAL: Invalid environment configuration:\n"
            f"  {'; '.join(problems)}\n"
            f"\nFix them in .env or the process environment.\n",
            file=sys.stderr,
        )
        sys.exit(1)

    for var in OPTIONAL_VARS:
        if not os.getenv(var):
            logger.warning("Optional env var %s is not set, using default", var)


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        assistant_name=os.getenv("NOVACALL_ASSISTANT_NAME", defaults.assistant_name).strip(),
        principal_name=os.getenv("NOVACALL_PRINCIPAL_NAME", defaults.principal_name).strip(),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        port=int(os.getenv("PORT", str(defaults.port))),
    )
