"""Vision calibration adapter for push-pull feeder package."""

import logging
from typing import Any, Tuple

from ..models.data_models import LengthUnit, Location, PipelineType, DetectedOffset
from ..services.contracts import VisionPipeline
from ..exceptions.custom_exceptions import VisionNotFoundError
from ..utils.geometric_calculations import calculate_distance
from ..utils.validation import validate_detection, validate_correction


class VisionCalibrationAdapter:
    """
    Turns sprocket hole detections into corrected machine locations.

    The adapter never looks at pixels itself: the external pipeline reports
    a pixel offset, the adapter scales it into millimeters and refuses
    low-confidence results and corrections beyond `max_correction`.
    """

    def __init__(self, pipeline: VisionPipeline, max_correction: float = 1.0,
                 min_confidence: float = 0.5, retries: int = 1):
        """
        Initialize vision calibration adapter.

        Args:
            pipeline: External sprocket hole detector
            max_correction: Largest accepted correction (mm)
            min_confidence: Lowest accepted detection confidence (0-1)
            retries: Extra detection attempts after VisionNotFoundError
        """
        self.pipeline = pipeline
        self.max_correction = max_correction
        self.min_confidence = min_confidence
        self.retries = retries
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, pipeline: VisionPipeline, settings) -> "VisionCalibrationAdapter":
        return cls(
            pipeline,
            max_correction=settings.max_vision_correction,
            min_confidence=settings.min_vision_confidence,
            retries=settings.vision_retries
        )

    @staticmethod
    def offset_to_physical(detection: DetectedOffset,
                           units_per_pixel: Location) -> Tuple[float, float]:
        """
        Scale a pixel offset into a machine-frame offset in millimeters.

        Image rows grow downwards, machine Y grows upwards.
        """
        scale = units_per_pixel.convert_to_units(LengthUnit.MILLIMETERS)
        return detection.dx_pixels * scale.x, -detection.dy_pixels * scale.y

    def detect(self, image: Any, expected_location: Location,
               pipeline_type: PipelineType) -> DetectedOffset:
        """
        Run the pipeline, retrying while it reports nothing found.

        Raises VisionNotFoundError once all attempts are used up.
        """
        attempts = self.retries + 1

        for attempt in range(attempts):
            try:
                detection = self.pipeline.detect(image, expected_location, pipeline_type)
                validate_detection(detection, self.min_confidence)
                return detection
            except VisionNotFoundError as e:
                if attempt < attempts - 1:
                    self.logger.warning(f"Hole detection attempt {attempt + 1} failed: {e}")
                else:
                    raise VisionNotFoundError(
                        f"No sprocket hole found near {expected_location} after {attempts} attempts: {e}"
                    ) from e

    def correct(self, image: Any, expected_location: Location, units_per_pixel: Location,
                pipeline_type: PipelineType) -> Location:
        """
        Corrected location of the hole expected at `expected_location`.

        Raises:
            VisionNotFoundError: If the pipeline found nothing usable
            CorrectionLimitError: If the correction is beyond `max_correction`
        """
        detection = self.detect(image, expected_location, pipeline_type)
        dx, dy = self.offset_to_physical(detection, units_per_pixel)

        correction = calculate_distance(0.0, 0.0, dx, dy)
        validate_correction(correction, self.max_correction)

        self.logger.debug(f"Hole correction ({dx:.3f}, {dy:.3f})mm, confidence {detection.confidence:.2f}")

        return expected_location.add(Location(LengthUnit.MILLIMETERS, dx, dy))
