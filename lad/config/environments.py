"""
Per-environment configuration overlays.

Each entry is a partial tree deep-merged onto the base definition when
``ENVIRONMENT`` matches its name. Environments without an entry run on
the base definition alone.
"""

import sys

OVERLAYS = {
    "development": {
        "auth": {
            "strategies": {
                "local": {
                    "max_attempts": sys.maxsize,
                },
            },
        },
        "views": {
            "locals": {
                "pretty": True,
                "cache": False,
            },
        },
    },
    "test": {
        "email": {
            "send": False,
        },
        "views": {
            "locals": {
                "cache": False,
            },
        },
    },
    "production": {
        "rate_limit": {
            "max": 100,
        },
        "views": {
            "locals": {
                "pretty": False,
                "cache": True,
            },
        },
    },
}
