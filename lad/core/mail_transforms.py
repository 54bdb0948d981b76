"""
Transforms applied to rendered email bodies before they are sent.

Each transform is a callable taking the HTML body and returning the new
body. They run synchronously, in order, inside the mail transport.
"""

import base64
import binascii
import hashlib
import logging
import re
from pathlib import Path
from typing import Dict, Optional

from premailer import Premailer

from lad.core.logging import logger
from lad.core.storage import ObjectStorage

# data:image/png;base64,iVBORw0... inside src="", url() or srcset.
# The payload may be wrapped over several lines.
INLINE_IMAGE = re.compile(
    r"data:(?P<mime>image/(?P<subtype>[a-z0-9.+-]+));base64,"
    r"(?P<payload>[A-Za-z0-9+/]+(?:[ \t]*\r?\n[ \t]*[A-Za-z0-9+/=]+)*={0,2})",
    re.IGNORECASE,
)

EXTENSIONS = {
    "jpeg": "jpg",
    "svg+xml": "svg",
    "x-icon": "ico",
    "vnd.microsoft.icon": "ico",
}


class InlineImageOffloader:
    """
    Replace inline base64 images with links to uploaded copies.

    Every ``data:image/...;base64,...`` URI in the body is decoded,
    uploaded under ``<sha256>.<ext>`` and swapped for the public URL.
    Bodies without inline images come back unchanged, so running the
    transform on its own output is a no-op.
    """

    def __init__(self, storage: ObjectStorage) -> None:
        self.storage = storage

    def __call__(self, html: str) -> str:
        if not html or INLINE_IMAGE.search(html) is None:
            return html

        uploaded: Dict[str, str] = {}

        def replace(match: re.Match) -> str:
            payload = "".join(match.group("payload").split())
            if payload in uploaded:
                return uploaded[payload]
            try:
                data = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError):
                logger.warning(
                    "Skipping malformed inline image",
                    extra={"mime": match.group("mime"), "length": len(payload)}
                )
                return match.group(0)

            subtype = match.group("subtype").lower()
            key = f"{hashlib.sha256(data).hexdigest()}.{EXTENSIONS.get(subtype, subtype)}"
            # StorageUploadError propagates and fails the send
            url = self.storage.upload(data, key, match.group("mime").lower())
            uploaded[payload] = url
            return url

        rewritten = INLINE_IMAGE.sub(replace, html)
        if uploaded:
            logger.info("Offloaded inline images", extra={"count": len(uploaded)})
        return rewritten


class CssInliner:
    """Move stylesheet rules into ``style`` attributes."""

    def __init__(self, relative_to: Optional[str] = None, preserve_important: bool = True) -> None:
        self.relative_to = str(Path(relative_to)) if relative_to else None
        self.preserve_important = preserve_important

    def __call__(self, html: str) -> str:
        if not html:
            return html
        return Premailer(
            html,
            base_path=self.relative_to,
            strip_important=not self.preserve_important,
            allow_network=False,
            allow_loading_external_files=self.relative_to is not None,
            disable_validation=True,
            cssutils_logging_level=logging.CRITICAL,
        ).transform()
