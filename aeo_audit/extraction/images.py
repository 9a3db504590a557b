"""Image accessibility extraction.

Collects alt-text coverage, lazy loading, modern formats and oversize
images. Images marked decorative with ``role="presentation"`` (or ``none``)
are not required to carry alt text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from bs4 import Tag

from aeo_audit.extraction.dom import PageDocument

# Patterns that indicate poor/generic alt text
POOR_ALT_PATTERNS = [
    r"^image\d*$",
    r"^img[_\s]?\d*$",
    r"^photo\d*$",
    r"^picture\d*$",
    r"^screenshot\d*$",
    r"^untitled\d*$",
    r"^dsc_?\d+$",  # Camera default names
    r"^\d+$",
    r"^[\w\-\.]+\.(jpg|jpeg|png|gif|webp|svg|bmp)$",  # Just a filename
]

DECORATIVE_ROLES = frozenset(["presentation", "none"])
MODERN_EXTENSIONS = (".webp", ".avif")
MODERN_MIME_TYPES = frozenset(["image/webp", "image/avif"])

MAX_ALT_LENGTH = 125
MAX_DIMENSION = 2000


def _is_modern_format(img: Tag, src: str) -> bool:
    path = urlsplit(src).path.lower()
    if path.endswith(MODERN_EXTENSIONS):
        return True
    # <picture> with a WebP or AVIF <source> ahead of the fallback <img>
    picture = img.find_parent("picture")
    if picture is None:
        return False
    return any(
        (source.get("type") or "").lower() in MODERN_MIME_TYPES
        for source in picture.find_all("source")
    )


def _dimension(img: Tag, name: str) -> int | None:
    value = (img.get(name) or "").strip().lower().removesuffix("px")
    return int(value) if value.isdigit() else None


@dataclass
class ImageInfo:
    """Information about a single image."""

    src: str
    alt: str | None
    is_decorative: bool
    is_lazy: bool
    width: int | None = None
    height: int | None = None
    is_modern_format: bool = False

    @property
    def missing_alt(self) -> bool:
        return not self.is_decorative and not (self.alt or "").strip()

    @property
    def alt_too_long(self) -> bool:
        return len(self.alt or "") > MAX_ALT_LENGTH

    @property
    def oversized(self) -> bool:
        return any(d is not None and d > MAX_DIMENSION for d in (self.width, self.height))

    @property
    def poor_alt(self) -> bool:
        alt = (self.alt or "").strip().lower()
        return bool(alt) and any(re.match(p, alt) for p in POOR_ALT_PATTERNS)

    def to_dict(self) -> dict:
        return {
            "src": self.src[:200],
            "alt": (self.alt or "")[:200],
            "decorative": self.is_decorative,
            "lazy": self.is_lazy,
            "modernFormat": self.is_modern_format,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class ImageAnalysis:
    """Image accessibility of a page."""

    images: list[ImageInfo] = field(default_factory=list)
    static_count: int = 0
    dynamic_count: int = 0  # Present only in the rendered DOM

    @property
    def total(self) -> int:
        return len(self.images)

    @property
    def missing_alt(self) -> list[ImageInfo]:
        return [img for img in self.images if img.missing_alt]

    @property
    def long_alt(self) -> list[ImageInfo]:
        return [img for img in self.images if img.alt_too_long]

    @property
    def oversized(self) -> list[ImageInfo]:
        return [img for img in self.images if img.oversized]

    @property
    def poor_alt(self) -> list[ImageInfo]:
        return [img for img in self.images if img.poor_alt]

    @property
    def lazy_ratio(self) -> float:
        return sum(1 for img in self.images if img.is_lazy) / self.total if self.total else 0.0

    @property
    def modern_ratio(self) -> float:
        if not self.total:
            return 0.0
        return sum(1 for img in self.images if img.is_modern_format) / self.total

    def to_dict(self) -> dict:
        return {
            "totalImages": self.total,
            "staticImages": self.static_count,
            "dynamicImages": self.dynamic_count,
            "withAlt": sum(1 for img in self.images if (img.alt or "").strip()),
            "missingAlt": len(self.missing_alt),
            "decorative": sum(1 for img in self.images if img.is_decorative),
            "longAlt": len(self.long_alt),
            "poorAlt": len(self.poor_alt),
            "oversized": len(self.oversized),
            "lazyLoaded": sum(1 for img in self.images if img.is_lazy),
            "modernFormat": sum(1 for img in self.images if img.is_modern_format),
        }


def _image_info(img: Tag) -> ImageInfo:
    src = img.get("src") or img.get("data-src") or ""
    return ImageInfo(
        src=src,
        alt=img.get("alt"),
        is_decorative=(img.get("role") or "").lower() in DECORATIVE_ROLES,
        is_lazy=(img.get("loading") or "").lower() == "lazy",
        width=_dimension(img, "width"),
        height=_dimension(img, "height"),
        is_modern_format=_is_modern_format(img, src),
    )


def analyze_images(static: PageDocument, rendered: PageDocument | None = None) -> ImageAnalysis:
    """
    Analyze images, preferring the rendered DOM when available.

    Args:
        static: Page as served
        rendered: Page after JavaScript execution, if captured

    Returns:
        ImageAnalysis over the rendered images when given, else the static ones
    """
    static_images = [_image_info(img) for img in static.soup.find_all("img")]
    if rendered is None:
        return ImageAnalysis(images=static_images, static_count=len(static_images))

    rendered_images = [_image_info(img) for img in rendered.soup.find_all("img")]
    static_srcs = {img.src for img in static_images}
    dynamic = sum(1 for img in rendered_images if img.src not in static_srcs)
    return ImageAnalysis(
        images=rendered_images,
        static_count=len(static_images),
        dynamic_count=dynamic,
    )
