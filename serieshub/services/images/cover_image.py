# serieshub/services/images/cover_image.py
from __future__ import annotations
import io, os, tempfile, time
from pathlib import Path
from typing import Callable, Optional
from PIL import Image, ImageOps, UnidentifiedImageError
from serieshub.common.logging import get_logger
from serieshub.common.path.safe import public_to_relative, resolve_root, safe_join
from serieshub.common.settings import ImageConfig

logger = get_logger()


def _safe_replace(tmp_path: Path, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    os.replace(tmp_path, out_path)


def _quality_step(quality: int) -> int:
    if quality > 80:
        return 10
    if quality > 60:
        return 8
    return 5


class CoverImageStore:
    """
    Local filesystem implementation of CoverImagePort.

    Uploaded images are center-cropped to the cover size and re-encoded as
    progressive JPEG, lowering quality until the file fits the size budget.
    Files land in <upload_root>/<covers_subdir>/<series_id>_<unix_ms>.jpg and
    the stored public path is "/<covers_subdir>/<file>".
    """

    def __init__(
        self,
        upload_root: Path | str,
        *,
        covers_subdir: str = "img/tarjeta",
        width: int = 190,
        height: int = 285,
        quality: int = 90,
        min_quality: int = 30,
        max_size_kb: int = 20,
        max_attempts: int = 8,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.root = resolve_root(upload_root)
        self.covers_subdir = covers_subdir.strip("/")
        self.size = (int(width), int(height))
        self.quality = int(quality)
        self.min_quality = int(min_quality)
        self.max_bytes = int(max_size_kb) * 1024
        self.max_attempts = int(max_attempts)
        self.clock = clock or time.time

    @classmethod
    def from_config(cls, cfg: ImageConfig, **kw) -> "CoverImageStore":
        return cls(
            cfg.upload_root,
            covers_subdir=cfg.covers_subdir,
            width=cfg.cover_width,
            height=cfg.cover_height,
            quality=cfg.quality,
            min_quality=cfg.min_quality,
            max_size_kb=cfg.max_size_kb,
            max_attempts=cfg.max_attempts,
            **kw,
        )

    # ---- CoverImagePort ----
    def process_and_save(self, data: bytes, series_id: int) -> str:
        payload = self.optimize(data)

        filename = f"{int(series_id)}_{int(self.clock() * 1000)}.jpg"
        out_path = safe_join(self.root, f"{self.covers_subdir}/{filename}")
        out_path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile("wb", suffix=".jpg", delete=False, dir=str(out_path.parent)) as tf:
            tf.write(payload)
            tmp_out = Path(tf.name)
        try:
            _safe_replace(tmp_out, out_path)
        finally:
            tmp_out.unlink(missing_ok=True)

        logger.info("Saved cover for series %s (%d bytes) -> %s", series_id, len(payload), out_path)
        return f"/{self.covers_subdir}/{filename}"

    def delete(self, image_path: str) -> None:
        """Remove a stored cover. A file that is already gone is not an error."""
        full = safe_join(self.root, public_to_relative(image_path))
        full.unlink(missing_ok=True)
        logger.info("Deleted cover %s", full)

    # ---- internals ----
    def optimize(self, data: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(data)) as im:
                im.load()
                src = ImageOps.exif_transpose(im).convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Error optimizing image: {e}") from e

        cover = ImageOps.fit(src, self.size, method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))

        quality = self.quality
        out = self._encode(cover, quality)
        attempts = 0
        while len(out) > self.max_bytes and quality > self.min_quality and attempts < self.max_attempts:
            quality -= _quality_step(quality)
            attempts += 1
            out = self._encode(cover, quality)

        if len(out) > self.max_bytes and quality <= self.min_quality:
            out = self._encode(cover, self.min_quality)

        logger.debug("Cover encoded at q=%s after %s attempts (%d bytes)", quality, attempts, len(out))
        return out

    def _encode(self, img: Image.Image, quality: int) -> bytes:
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=int(quality), optimize=True, progressive=True)
        return buf.getvalue()
