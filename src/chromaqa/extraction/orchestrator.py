"""
Extraction orchestrator that picks a strategy per asset provenance.

The ExtractionOrchestrator merges the extractors into one result:
- Structural captures with element metadata: colors and fonts come straight
  from computed styles with exact bounds, and no pixels are touched
- Image and design captures: histogram sampling, then region detection on a
  downscaled copy to locate each color
- Fonts are read from element metadata whenever it is present, whichever
  color path ran
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from ..config import ChromaQASettings, get_settings
from ..logging import PerformanceLogger
from .color_extractor import extract_colors_from_buffer, merge_similar_colors
from .dom_extractor import extract_colors_from_dom
from .font_extractor import extract_fonts
from .models import CapturedAsset, ExtractionResult, LocatedColor, LocatedFont, Provenance
from .pixel_buffer import PixelBuffer, decode_image, decode_image_async
from .region_detector import locate_colors_scaled

logger = logging.getLogger(__name__)


class ExtractionOrchestrator:
    """Main orchestrator that coordinates the color and font extractors."""

    def __init__(self, settings: ChromaQASettings | None = None):
        """Initialize the orchestrator.

        Args:
            settings: Extraction settings; the global settings when omitted
        """
        self.settings = settings or get_settings()
        self.perf = PerformanceLogger(logger)

    @staticmethod
    def uses_structural_path(asset: CapturedAsset) -> bool:
        """True when colors can be read from element metadata alone."""
        return asset.provenance == Provenance.STRUCTURAL and asset.has_elements

    async def extract(self, asset: CapturedAsset) -> ExtractionResult:
        """
        Extract located colors and fonts from one asset.

        Args:
            asset: Captured asset tagged with its provenance

        Returns:
            Extraction result; empty when the asset carries neither usable
            pixels nor element metadata

        Raises:
            ImageDecodeError: If the asset's image bytes cannot be decoded
        """
        if self.uses_structural_path(asset):
            return self._extract_structural(asset)

        buffer = await decode_image_async(asset.image_bytes) if asset.image_bytes else None
        return self._extract_with_buffer(asset, buffer)

    def extract_sync(self, asset: CapturedAsset) -> ExtractionResult:
        """Blocking variant of :meth:`extract` for worker threads."""
        if self.uses_structural_path(asset):
            return self._extract_structural(asset)

        buffer = decode_image(asset.image_bytes) if asset.image_bytes else None
        return self._extract_with_buffer(asset, buffer)

    async def extract_many(
        self, assets: list[CapturedAsset], max_workers: int | None = None
    ) -> list[ExtractionResult]:
        """
        Extract several assets in parallel, one pixel buffer per worker.

        Results are returned in input order. A decode failure in any asset
        propagates after the remaining extractions finish.
        """
        if not assets:
            return []

        workers = max_workers or self.settings.max_workers
        loop = asyncio.get_running_loop()

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="chromaqa") as pool:
            futures = [loop.run_in_executor(pool, self.extract_sync, asset) for asset in assets]
            results = await asyncio.gather(*futures, return_exceptions=True)

        for asset, outcome in zip(assets, results):
            if isinstance(outcome, BaseException):
                logger.error(f"Extraction failed for asset {asset.id or '<unnamed>'}: {outcome}")
                raise outcome

        return list(results)

    def _extract_structural(self, asset: CapturedAsset) -> ExtractionResult:
        elements = asset.elements or []
        with self.perf.timed("structural_extraction", elements=len(elements)):
            result = ExtractionResult(
                colors=extract_colors_from_dom(elements),
                fonts=self._extract_fonts(asset),
            )

        logger.info(
            f"Structural extraction complete: {len(result.colors)} colors, "
            f"{len(result.fonts)} fonts"
        )
        return result

    def _extract_with_buffer(
        self, asset: CapturedAsset, buffer: PixelBuffer | None
    ) -> ExtractionResult:
        colors = self._extract_pixel_colors(buffer) if buffer is not None else []
        fonts = self._extract_fonts(asset)

        if buffer is None and not fonts:
            logger.info(f"Asset {asset.id or '<unnamed>'} has no pixels or elements to extract")

        result = ExtractionResult(colors=colors, fonts=fonts)
        logger.info(
            f"{asset.provenance.value.capitalize()} extraction complete: "
            f"{len(result.colors)} colors, {len(result.fonts)} fonts"
        )
        return result

    def _extract_pixel_colors(self, buffer: PixelBuffer) -> list[LocatedColor]:
        settings = self.settings
        with self.perf.timed("color_histogram", width=buffer.width, height=buffer.height):
            samples = extract_colors_from_buffer(
                buffer, sample_rate=settings.sample_rate, max_colors=settings.max_colors
            )

        if settings.merge_delta_e > 0:
            samples = merge_similar_colors(samples, settings.merge_delta_e)

        with self.perf.timed("region_detection", colors=len(samples)):
            return locate_colors_scaled(
                buffer,
                samples,
                max_dimension=settings.max_dimension,
                tolerance=settings.tolerance,
                min_region_percent=settings.min_region_percent,
            )

    def _extract_fonts(self, asset: CapturedAsset) -> list[LocatedFont]:
        return extract_fonts(
            asset.elements,
            design_nodes=asset.design_nodes,
            preview_length=self.settings.text_preview_length,
        )


async def extract_all(
    asset: CapturedAsset, settings: ChromaQASettings | None = None
) -> ExtractionResult:
    """Extract all colors and fonts from a captured asset."""
    return await ExtractionOrchestrator(settings).extract(asset)
