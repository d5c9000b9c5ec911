"""Visual regression snapshots for pages and elements.

Screenshots are captured with Playwright and compared against stored
baselines with Pillow and numpy. The first run for a name writes the
baseline; later runs compare against it. A mismatch leaves the actual image
and a side-by-side diff (baseline | actual | differences in red) in the
output directory.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DIFF_COLOR = (255, 0, 0)


@dataclass
class SnapshotResult:
    """Outcome of comparing one screenshot against its baseline."""
    name: str
    baseline_path: Path
    actual_path: Optional[Path] = None
    diff_path: Optional[Path] = None
    diff_pixels: int = 0
    total_pixels: int = 0
    baseline_written: bool = False
    matched: bool = True

    @property
    def diff_ratio(self) -> float:
        if not self.total_pixels:
            return 0.0
        return self.diff_pixels / self.total_pixels


class SnapshotMismatch(AssertionError):
    def __init__(self, result: SnapshotResult, reason: str):
        self.result = result
        super().__init__(
            f"Snapshot '{result.name}' does not match baseline: {reason}. "
            f"Baseline: {result.baseline_path}; actual: {result.actual_path}; diff: {result.diff_path}"
        )


def _snapshot_filename(name: str, suffix: str, kind: str = "") -> str:
    stem = name[:-4] if name.endswith(".png") else name
    parts = [stem, kind, suffix]
    return "-".join(part for part in parts if part) + ".png"


def pixel_diff_mask(baseline: np.ndarray, actual: np.ndarray, threshold: float) -> np.ndarray:
    """
    Boolean mask of pixels whose largest channel difference exceeds
    `threshold` (0.0 = any change counts, 1.0 = nothing counts).
    """
    delta = np.abs(baseline.astype(np.int16) - actual.astype(np.int16)).max(axis=2)
    return delta > threshold * 255


class SnapshotComparator:
    """
    Compare screenshots against baselines kept in `snapshot_dir`.

    Attributes:
        threshold: per-pixel colour tolerance, 0.0 to 1.0
        max_diff_pixels: differing pixels allowed before failing
        max_diff_pixel_ratio: differing share of the image allowed, if set
        suffix: appended to baseline names (usually the browser name),
            since rendering differs between engines
    """

    def __init__(
        self,
        snapshot_dir: Union[str, Path],
        output_dir: Union[str, Path],
        update: bool = False,
        threshold: float = 0.2,
        max_diff_pixels: int = 0,
        max_diff_pixel_ratio: Optional[float] = None,
        suffix: str = ""
    ):
        _check_threshold(threshold)
        if max_diff_pixel_ratio is not None:
            _check_threshold(max_diff_pixel_ratio)
        self.snapshot_dir = Path(snapshot_dir)
        self.output_dir = Path(output_dir)
        self.update = update
        self.threshold = threshold
        self.max_diff_pixels = max_diff_pixels
        self.max_diff_pixel_ratio = max_diff_pixel_ratio
        self.suffix = suffix
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def baseline_path(self, name: str) -> Path:
        return self.snapshot_dir / _snapshot_filename(name, self.suffix)

    def compare(
        self,
        name: str,
        png: bytes,
        threshold: Optional[float] = None,
        max_diff_pixels: Optional[int] = None,
        max_diff_pixel_ratio: Optional[float] = None
    ) -> SnapshotResult:
        """Compare PNG bytes with the named baseline, writing it if missing."""
        threshold = self.threshold if threshold is None else threshold
        _check_threshold(threshold)
        max_diff_pixels = self.max_diff_pixels if max_diff_pixels is None else max_diff_pixels
        if max_diff_pixel_ratio is None:
            max_diff_pixel_ratio = self.max_diff_pixel_ratio

        baseline_path = self.baseline_path(name)
        result = SnapshotResult(name=name, baseline_path=baseline_path)

        if self.update or not baseline_path.exists():
            baseline_path.write_bytes(png)
            logger.info("Wrote baseline %s", baseline_path)
            result.baseline_written = True
            return result

        baseline_img = Image.open(baseline_path).convert("RGB")
        actual_img = Image.open(io.BytesIO(png)).convert("RGB")
        result.actual_path = self.output_dir / _snapshot_filename(name, self.suffix, "actual")

        if baseline_img.size != actual_img.size:
            actual_img.save(result.actual_path)
            result.matched = False
            result.total_pixels = baseline_img.size[0] * baseline_img.size[1]
            result.diff_pixels = result.total_pixels
            raise SnapshotMismatch(
                result,
                f"expected {baseline_img.size[0]}x{baseline_img.size[1]}, "
                f"got {actual_img.size[0]}x{actual_img.size[1]}"
            )

        baseline = np.array(baseline_img)
        actual = np.array(actual_img)
        mask = pixel_diff_mask(baseline, actual, threshold)
        result.diff_pixels = int(mask.sum())
        result.total_pixels = int(mask.size)

        too_many = result.diff_pixels > max_diff_pixels
        if max_diff_pixel_ratio is not None:
            too_many = result.diff_ratio > max_diff_pixel_ratio and too_many

        logger.info(
            "Snapshot %s: %d differing pixels (%.4f%%)",
            name, result.diff_pixels, result.diff_ratio * 100
        )

        if too_many:
            result.matched = False
            actual_img.save(result.actual_path)
            result.diff_path = self._write_diff(name, baseline, actual, mask)
            raise SnapshotMismatch(
                result,
                f"{result.diff_pixels} pixels differ (allowed {max_diff_pixels}"
                + (f", ratio {max_diff_pixel_ratio}" if max_diff_pixel_ratio is not None else "")
                + ")"
            )
        return result

    def assert_matches(
        self,
        target,
        name: str,
        full_page: bool = False,
        mask: Sequence = (),
        animations: str = "disabled",
        caret: str = "hide",
        timeout: Optional[float] = None,
        **tolerance
    ) -> SnapshotResult:
        """
        Screenshot a Page or Locator and compare it with the baseline.

        `mask` takes locators to paint over before capture (timestamps,
        flash messages). `tolerance` accepts threshold, max_diff_pixels and
        max_diff_pixel_ratio overrides.
        """
        options = {"animations": animations, "caret": caret}
        if mask:
            options["mask"] = list(mask)
        if full_page:
            options["full_page"] = True
        if timeout is not None:
            options["timeout"] = timeout
        png = target.screenshot(**options)
        return self.compare(name, png, **tolerance)

    def _write_diff(self, name: str, baseline: np.ndarray, actual: np.ndarray, mask: np.ndarray) -> Path:
        height, width = baseline.shape[:2]
        highlighted = actual.copy()
        highlighted[mask] = DIFF_COLOR

        combined = np.zeros((height, width * 3, 3), dtype=np.uint8)
        combined[:, :width] = baseline
        combined[:, width:width * 2] = actual
        combined[:, width * 2:] = highlighted

        diff_path = self.output_dir / _snapshot_filename(name, self.suffix, "diff")
        Image.fromarray(combined).save(diff_path)
        logger.info("Diff image saved: %s", diff_path)
        return diff_path


def _check_threshold(value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError("Threshold must be between 0.0 and 1.0")
