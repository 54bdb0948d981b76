"""
Base configuration definition.

``base_definition`` returns the full literal tree before any overlay,
derivation or collaborator is applied. Values are either literals or read
from the ``EnvironmentMap``. Slots that augmentation fills later are
reserved here with ``None`` (or an empty mapping for filter tables).
"""

import os
import socket
from pathlib import Path
from typing import Any, Dict

from lad.config.env import EnvironmentMap
from lad.config.phrases import PHRASES

PACKAGE_DIR = Path(__file__).resolve().parent.parent
PROJECT_DIR = PACKAGE_DIR.parent

LOCALES_DIR = PACKAGE_DIR / "locales"
VIEWS_DIR = PACKAGE_DIR / "views"
EMAILS_DIR = PACKAGE_DIR / "emails"
BUILD_DIR = PROJECT_DIR / "build"
ASSETS_DIR = PROJECT_DIR / "assets"

GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]


def client_ip(request: Any) -> Any:
    """Rate limit bucket: one per client address."""
    return request.client.host if request.client else None


def base_definition(env: EnvironmentMap) -> Dict[str, Any]:
    """
    Build the base configuration tree from the environment.

    Raises:
        ConfigurationError: If a required environment variable is missing.
    """
    environment = env.require("ENVIRONMENT")
    cdn_domain = env.get("CDN_DOMAIN")

    return {
        "email_font_path": str(ASSETS_DIR / "fonts" / "GoudyBookletter1911.otf"),

        # server
        "protocols": {
            "web": env.require("WEB_PROTOCOL"),
            "api": env.require("API_PROTOCOL"),
        },
        "ports": {
            "web": env.require("WEB_PORT"),
            "api": env.require("API_PORT"),
        },
        "hosts": {
            "web": env.require("WEB_HOST"),
            "api": env.require("API_HOST"),
        },
        "env": environment,
        "urls": {
            "web": env.require("WEB_URL"),
            "api": env.require("API_URL"),
        },
        "ssl": {
            "web": {},
            "api": {},
        },

        # app
        "google_translate_key": env.get("GOOGLE_TRANSLATE_KEY"),
        "web_request_timeout_ms": env.require("WEB_REQUEST_TIMEOUT_MS"),
        "api_request_timeout_ms": env.require("API_REQUEST_TIMEOUT_MS"),
        "contact_request_max_length": env.require("CONTACT_REQUEST_MAX_LENGTH"),
        "cookies_key": env.require("COOKIES_KEY"),
        "email": {
            "message": {
                "from": env.require("EMAIL_DEFAULT_FROM"),
            },
            "send": env.require("SEND_EMAIL"),
            "service": env.require("MAIL_SERVICE"),
            "auth": {
                "user": env.get("MAIL_API_TOKEN"),
                "pass": env.get("MAIL_API_TOKEN"),
            },
            "juice_resources": {
                "preserve_important": True,
                "web_resources": None,
            },
            # filled in by augmentation
            "transport": None,
            "views": None,
            "i18n": None,
        },
        "livereload": {
            "port": env.require("LIVERELOAD_PORT"),
        },
        "logger": {
            "show_stack": env.require("SHOW_STACK"),
            "app_name": env.require("APP_NAME"),
        },
        "ga": env.get("GOOGLE_ANALYTICS"),
        "session_keys": list(env.require("SESSION_KEYS")),
        "trust_proxy": env.require("TRUST_PROXY"),
        "is_cacti_enabled": env.require("IS_CACTI_ENABLED"),
        "cors": {},
        "rate_limit": {
            "duration": 60000,
            "max": 1000,
            "id": client_ip,
        },
        "manifest_rev": {
            "manifest": str(BUILD_DIR / "rev-manifest.json"),
            "prepend": f"//{cdn_domain}/" if cdn_domain and environment == "production" else "/",
        },
        "app_favicon": str(ASSETS_DIR / "img" / "favicon.ico"),
        "app_name": env.require("APP_NAME"),
        "i18n": {
            "phrases": dict(PHRASES),
            "directory": str(LOCALES_DIR),
            "locales": ["en", "es", "zh"],
            "default_locale": "en",
            # filled in by augmentation
            "engine": None,
        },
        "serve_static": {},

        # database
        "database": {
            "url": env.require("DATABASE_URL"),
            "debug": env.require("DATABASE_DEBUG"),
        },

        # jobs
        "jobs": {
            "name": f"{socket.gethostname()}_{os.getpid()}",
            "max_concurrency": env.require("JOBS_MAX_CONCURRENCY"),
            "collection_name": env.require("JOBS_COLLECTION_NAME"),
            # [interval, job name] pairs scheduled at boot
            "recurring": [],
        },

        "storage": {
            "url": env.get("STORAGE_URL"),
            "key": env.get("STORAGE_KEY"),
            "bucket": env.require("STORAGE_BUCKET"),
            "cdn_domain": cdn_domain,
        },

        "redis": env.require("REDIS_URL"),

        # templating
        "build_dir": str(BUILD_DIR),
        "views": {
            "root": str(VIEWS_DIR),
            "options": {
                "extension": "html",
                "map": {},
            },
            "locals": {
                "pretty": True,
                "cache": environment != "development",
                "filters": {
                    # filled in by augmentation
                    "translate": None,
                },
                "config": None,
            },
        },

        "csrf": {},

        # authentication
        "auth": {
            "local": env.require("AUTH_LOCAL_ENABLED"),
            "providers": {
                "facebook": env.require("AUTH_FACEBOOK_ENABLED"),
                "twitter": env.require("AUTH_TWITTER_ENABLED"),
                "google": env.require("AUTH_GOOGLE_ENABLED"),
                "github": env.require("AUTH_GITHUB_ENABLED"),
                "linkedin": env.require("AUTH_LINKEDIN_ENABLED"),
                "instagram": env.require("AUTH_INSTAGRAM_ENABLED"),
                "stripe": env.require("AUTH_STRIPE_ENABLED"),
            },
            "strategies": {
                "local": {
                    "username_field": "email",
                    "password_field": "password",
                    "username_lower_case": True,
                    "limit_attempts": True,
                    "max_attempts": 5,
                    "digest_algorithm": "sha256",
                    "encoding": "hex",
                    "saltlen": 32,
                    "iterations": 25000,
                    "keylen": 512,
                },
                "google": {
                    "client_id": env.get("GOOGLE_CLIENT_ID"),
                    "client_secret": env.get("GOOGLE_CLIENT_SECRET"),
                    "callback_url": f"{env.require('WEB_URL')}/auth/google/ok",
                },
            },
            "callback_opts": {
                "success_return_to_or_redirect": "/",
                "failure_redirect": "/login",
                "success_flash": True,
                "failure_flash": True,
            },
            "google": {
                "access_type": "offline",
                "approval_prompt": "force",
                "scope": list(GOOGLE_SCOPES),
            },
        },

        # stripe
        "stripe": {
            "secret_key": env.get("STRIPE_SECRET_KEY"),
            "publishable_key": env.get("STRIPE_PUBLISHABLE_KEY"),
        },
    }
