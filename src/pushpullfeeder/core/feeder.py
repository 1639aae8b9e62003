"""Push-pull feeder controller."""

import time
from typing import Any, Dict, Optional, Tuple

from ..models.data_models import (
    LengthUnit, Location, Tape, CalibrationTrigger, PipelineType, FeederState
)
from ..config.settings import Settings
from ..services.contracts import Actuator, Camera
from ..exceptions.custom_exceptions import FeederError, CalibrationError
from ..utils.geometric_calculations import location_distance, midpoint, mean_magnitude
from ..utils.validation import validate_hole_locations, validate_hole_pair
from ..utils.logging_utils import (
    setup_logger, log_feed_start, log_feed_success, log_feed_failure,
    log_calibration_status, suppress_debug_output
)
from .tape_geometry import (
    get_hole1_location, get_hole2_location, pick_location_from_holes, tape_angle
)
from .vision_calibration import VisionCalibrationAdapter

# minimum corrections kept for the UNTIL_CONFIDENT statistics
CORRECTION_HISTORY_LENGTH = 10

HolePair = Tuple[Location, Location]


class PushPullFeeder:
    """
    Feeder advancing component tape with a push-pull actuator stroke.

    Pick locations are derived from a calibrated pair of sprocket holes and
    the number of part pitches fed since that calibration. Depending on the
    calibration trigger the holes are re-measured with the head camera
    before a feed. Feeder state only changes once a feed is confirmed.
    """

    def __init__(self, tape: Tape, settings: Optional[Settings] = None,
                 feed_actuator: Optional[Actuator] = None,
                 rotation_actuator: Optional[Actuator] = None,
                 camera: Optional[Camera] = None,
                 vision: Optional[VisionCalibrationAdapter] = None,
                 location: Optional[Location] = None,
                 name: Optional[str] = None):
        """
        Initialize push-pull feeder.

        Args:
            tape: Tape loaded in the feeder
            settings: Feeder configuration (uses defaults if None)
            feed_actuator: Push-pull feed actuator
            rotation_actuator: Optional cover tape peel actuator, driven after the feed
            camera: Head camera used for sprocket hole calibration
            vision: Vision calibration adapter
            location: Nominal pick location, the starting point of auto setup
            name: Feeder name (settings feeder_name if None)
        """
        self.settings = settings or Settings()
        self.settings.validate_settings()

        suppress_debug_output()
        self.logger = setup_logger(__name__, self.settings.log_level)

        self.name = name or self.settings.feeder_name
        self._tape = tape
        self.feed_actuator = feed_actuator
        self.rotation_actuator = rotation_actuator
        self.camera = camera
        self.vision = vision
        self.location = location

        self.state = FeederState(calibration_trigger=self.settings.calibration_trigger)

    @property
    def tape(self) -> Tape:
        return self._tape

    @tape.setter
    def tape(self, tape: Tape) -> None:
        self.set_tape(tape)

    @property
    def hole1_location(self) -> Optional[Location]:
        return self.state.hole1_location

    @property
    def hole2_location(self) -> Optional[Location]:
        return self.state.hole2_location

    @property
    def feed_count(self) -> int:
        return self.state.feed_count

    @property
    def last_pick_location(self) -> Optional[Location]:
        return self.state.last_pick_location

    @property
    def calibration_trigger(self) -> CalibrationTrigger:
        return self.state.calibration_trigger

    @calibration_trigger.setter
    def calibration_trigger(self, trigger: CalibrationTrigger) -> None:
        self.state.calibration_trigger = trigger

    def set_tape(self, tape: Tape) -> None:
        """Change the tape; holes calibrated against another tape are discarded."""
        if tape != self._tape:
            if self.state.has_holes:
                self.logger.warning(f"Tape of feeder '{self.name}' changed, sprocket hole calibration discarded")
            self.state.clear_calibration()
            self.state.last_pick_location = None
        self._tape = tape

    def set_hole_locations(self, hole1_location: Location, hole2_location: Location) -> None:
        """Enter the sprocket hole pair manually; vision statistics restart."""
        self.state.clear_calibration()
        self.state.hole1_location = hole1_location
        self.state.hole2_location = hole2_location
        self.state.calibration_tape = self._tape

    def reset_calibration(self) -> None:
        """Forget the sprocket hole pair, returning to Uncalibrated."""
        self.state.clear_calibration()
        self.state.last_pick_location = None
        self.logger.info(f"Feeder '{self.name}' sprocket hole calibration reset")

    def is_confident(self) -> bool:
        """True once recent vision corrections are within the wanted precision."""
        samples = self.settings.precision_confidence_samples
        if self.state.calibration_count < samples:
            return False
        recent = self.state.correction_history[-samples:]
        return mean_magnitude(recent) <= self.settings.precision_wanted

    def get_pick_location(self) -> Location:
        """
        Pick location for the current feed count, without feeding.

        Raises InvalidCalibrationError if the sprocket holes are not calibrated.
        """
        hole1, hole2 = self._validated_holes()
        return self._pick_location(hole1, hole2, self.state.feed_count)

    def feed(self, tool: Any = "tool") -> Location:
        """
        Feed the next part and return its pick location.

        Args:
            tool: Tool (nozzle) that will pick the part, for logging

        Returns:
            Pick location of the fed part

        Raises:
            InvalidCalibrationError: Sprocket holes unset or too close together (no motion)
            CalibrationError: Vision recalibration failed and fallback is off (no motion)
            ActuatorFault: Feed or peel actuator failed
            MotionFault: Camera could not reach the sprocket holes
        """
        log_feed_start(self.logger, self.name, getattr(tool, "name", str(tool)))

        try:
            hole1, hole2 = self._validated_holes()
            feed_count = self.state.feed_count

            recalibration = None
            if self._calibration_due():
                recalibration = self._recalibrate(hole1, hole2)
            if recalibration is not None:
                hole1, hole2, _ = recalibration
                feed_count = 0

            pick_location = self._pick_location(hole1, hole2, feed_count)

            if self.feed_actuator is not None:
                self._stroke(self.feed_actuator, self.settings.feed_dwell)
            else:
                self.logger.warning(f"Feeder '{self.name}' has no feed actuator, no tape moved")

        except FeederError as e:
            self.state.last_error = str(e)
            log_feed_failure(self.logger, str(e))
            raise

        # the feed stroke is confirmed from here on, peel faults don't undo it
        self._commit_feed(recalibration, feed_count, pick_location)

        if self.rotation_actuator is not None:
            try:
                self._stroke(self.rotation_actuator, self.settings.peel_dwell)
            except FeederError as e:
                self.state.last_error = str(e)
                log_feed_failure(self.logger, f"Peel after feed failed: {e}")
                raise

        log_feed_success(self.logger, self.name, pick_location.x, pick_location.y, self.state.feed_count)
        return pick_location

    def auto_setup(self, camera: Optional[Camera] = None) -> Optional[FeederError]:
        """Auto setup with the configured vision pipeline."""
        return self.auto_setup_pipeline(camera or self.camera, self.settings.pipeline_type)

    def auto_setup_pipeline(self, camera: Optional[Camera],
                            pipeline_type: PipelineType) -> Optional[FeederError]:
        """
        Establish the sprocket hole pair from a camera image at the feeder location.

        Returns:
            None on success, otherwise the error (feeder state unchanged)
        """
        try:
            if camera is None or self.vision is None:
                raise CalibrationError(f"Feeder '{self.name}' auto setup needs a camera and a vision pipeline")

            if self.location is None:
                raise CalibrationError(f"Feeder '{self.name}' location is not set")

            expected1 = get_hole1_location(self._tape, self.location)
            expected2 = get_hole2_location(self._tape, self.location)

            # camera height is its own, the pick Z belongs to the nozzle
            camera.move_to(self.location.derive(z=0.0))
            hole1, hole2, correction = self._detect_hole_pair(camera, expected1, expected2, pipeline_type)

        except FeederError as e:
            self.state.last_error = str(e)
            log_calibration_status(self.logger, False, f"Feeder '{self.name}' auto setup: {e}")
            return e

        self.state.clear_calibration()
        self._apply_calibration(hole1, hole2, correction)
        log_calibration_status(
            self.logger, True,
            f"Feeder '{self.name}' holes at {hole1} and {hole2} ({pipeline_type.name})"
        )
        return None

    def actuator_status(self) -> Dict[str, str]:
        """Read the configured actuators."""
        status = {}
        for actuator in (self.feed_actuator, self.rotation_actuator):
            if actuator is not None:
                status[actuator.name] = actuator.read()
        return status

    def _validated_holes(self) -> HolePair:
        validate_hole_locations(
            self.name,
            self.state.hole1_location,
            self.state.hole2_location,
            self.settings.min_hole_distance
        )
        return self.state.hole1_location, self.state.hole2_location

    def _calibration_due(self) -> bool:
        trigger = self.state.calibration_trigger

        if trigger == CalibrationTrigger.NONE:
            return False

        if self.camera is None or self.vision is None:
            self.logger.debug(f"Feeder '{self.name}' has no camera/vision, calibration trigger {trigger.name} inactive")
            return False

        if trigger == CalibrationTrigger.ON_FIRST_USE:
            return self.state.calibration_count == 0
        if trigger == CalibrationTrigger.UNTIL_CONFIDENT:
            return not self.is_confident()
        return True

    def _recalibrate(self, hole1: Location, hole2: Location) -> Optional[Tuple[Location, Location, float]]:
        """
        Re-measure the hole pair with vision.

        Returns:
            (hole1, hole2, correction) or None when falling back to the current holes

        Raises CalibrationError when vision fails and fallback is off.
        """
        self.camera.move_to(midpoint(hole1, hole2))

        try:
            result = self._detect_hole_pair(self.camera, hole1, hole2, self.settings.pipeline_type)
        except CalibrationError as e:
            log_calibration_status(self.logger, False, f"Feeder '{self.name}': {e}")
            if self.settings.vision_fallback:
                self.logger.warning(f"Feeder '{self.name}' using uncorrected sprocket hole locations")
                return None
            raise CalibrationError(f"Feeder '{self.name}' vision calibration failed: {e}") from e

        log_calibration_status(self.logger, True, f"Feeder '{self.name}' correction {result[2]:.3f}mm")
        return result

    def _detect_hole_pair(self, camera: Camera, expected1: Location, expected2: Location,
                          pipeline_type: PipelineType) -> Tuple[Location, Location, float]:
        """Correct both holes from one image; camera must already be over them."""
        image = camera.capture()

        hole1 = self.vision.correct(image, expected1, camera.units_per_pixel, pipeline_type)
        hole2 = self.vision.correct(image, expected2, camera.units_per_pixel, pipeline_type)

        validate_hole_pair(self._tape, hole1, hole2, self.settings.hole_pitch_tolerance)

        correction = max(location_distance(expected1, hole1), location_distance(expected2, hole2))
        return hole1, hole2, correction

    def _apply_calibration(self, hole1: Location, hole2: Location, correction: float) -> None:
        self.state.hole1_location = hole1
        self.state.hole2_location = hole2
        self.state.feed_count = 0
        self.state.calibration_count += 1
        self.state.calibration_tape = self._tape
        self.state.correction_history.append(correction)
        kept = max(CORRECTION_HISTORY_LENGTH, self.settings.precision_confidence_samples)
        del self.state.correction_history[:-kept]

    def _commit_feed(self, recalibration: Optional[Tuple[Location, Location, float]],
                     feed_count: int, pick_location: Location) -> None:
        if recalibration is not None:
            self._apply_calibration(*recalibration)
        self.state.feed_count = feed_count + self.settings.parts_per_feed
        self.state.last_pick_location = pick_location
        self.state.last_error = None

    def _pick_location(self, hole1: Location, hole2: Location, feed_count: int) -> Location:
        # pick_z_offset is in mm, the pick location carries the hole units
        pick_z = LengthUnit.MILLIMETERS.convert(self.settings.pick_z_offset, hole1.units)
        return pick_location_from_holes(
            self._tape, hole1, hole2, feed_count,
            z=pick_z,
            rotation=tape_angle(hole1, hole2) + self.settings.part_rotation
        )

    def _stroke(self, actuator: Actuator, dwell: float) -> None:
        """Drive one actuator through on, dwell, off."""
        self.logger.debug(f"Actuating {actuator.name}")
        actuator.actuate(True)
        time.sleep(dwell)
        actuator.actuate(False)
