"""

Auxiliary image assets: letterhead header/footer and the signature.

Assets are loaded once per render call and are immutable afterwards. A
missing or undecodable image never stops a render; it is logged and the
decoration is left out.

"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image, UnidentifiedImageError

from .exceptions import AssetError

logger = logging.getLogger(__name__)

HEADER_FILE = "Latter-pad-head.png"
FOOTER_FILE = "Latter-pad-bottom.png"
SIGNATURE_FILE = "signature.png"


def verify_image(name: str, data: bytes) -> bytes:
    """Check that ``data`` decodes as an image; raise AssetError otherwise."""
    if not data:
        raise AssetError(name, "empty image data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise AssetError(name, str(exc)) from exc
    return data


def usable_image(name: str, data: Optional[bytes]) -> Optional[bytes]:
    """``data`` if it decodes as an image, else None with a warning."""
    if data is None:
        return None
    try:
        return verify_image(name, data)
    except AssetError as exc:
        logger.warning(f"Ignoring {name} image: {exc}")
        return None


def image_from_value(name: str, value: Any) -> Optional[bytes]:
    """

    Decode an image carried in a record.

    Accepts raw bytes or a base64 string, with or without a
    ``data:image/...;base64,`` prefix. Anything that does not decode to an
    image is dropped with a warning.

    """
    if value is None or value == "":
        return None
    if isinstance(value, (bytes, bytearray)):
        return usable_image(name, bytes(value))
    text = str(value).strip()
    if text.startswith("data:"):
        text = text.partition(",")[2]
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning(f"Ignoring {name} image: not valid base64 ({exc})")
        return None
    return usable_image(name, data)


@dataclass(frozen=True, slots=True)
class DocumentAssets:
    """Image bytes available to one render call."""

    header_image: Optional[bytes] = None
    footer_image: Optional[bytes] = None
    signature_image: Optional[bytes] = None

    @classmethod
    def from_bytes(
        cls,
        header_image: Optional[bytes] = None,
        footer_image: Optional[bytes] = None,
        signature_image: Optional[bytes] = None,
    ) -> "DocumentAssets":
        """Build assets from raw bytes, dropping images that do not decode."""
        return cls(
            header_image=usable_image("header", header_image),
            footer_image=usable_image("footer", footer_image),
            signature_image=usable_image("signature", signature_image),
        )

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "DocumentAssets":
        """Load the well-known asset files from ``directory``.

        Missing files are skipped with a warning.
        """
        root = Path(directory)
        loaded = {}
        for key, filename in (
            ("header_image", HEADER_FILE),
            ("footer_image", FOOTER_FILE),
            ("signature_image", SIGNATURE_FILE),
        ):
            path = root / filename
            try:
                loaded[key] = path.read_bytes()
            except OSError as exc:
                logger.warning(f"Asset {filename} not loaded from {root}: {exc}")
                loaded[key] = None
        return cls.from_bytes(**loaded)

    @property
    def has_letterhead(self) -> bool:
        return self.header_image is not None or self.footer_image is not None
