"""Command-line interface for push-pull feeder package."""

import click
from typing import Optional, Tuple

from ..core.feeder import PushPullFeeder
from ..core.tape_geometry import (
    pick_location_from_start, get_hole1_location, get_hole2_location
)
from ..config.settings import Settings
from ..config.tape_presets import TapePresets
from ..models.data_models import LengthUnit, Location, CalibrationTrigger
from ..services.serial_actuator import FeederBoardService, SerialActuator
from ..exceptions.custom_exceptions import FeederError, InvalidCalibrationError
from ..utils.logging_utils import setup_logger


@click.group()
@click.version_option(package_name="pushpull-feeder")
@click.option('--log-level', default='INFO', envvar='LOG_LEVEL', show_default=True,
              help='Logging level (DEBUG, INFO, WARNING, ERROR)')
@click.pass_context
def main(ctx, log_level):
    """Push-Pull Feeder CLI - tape geometry and feeder control."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level

    setup_logger('pushpullfeeder', log_level)


@main.command()
def config():
    """Show current configuration."""
    try:
        settings = Settings()
    except FeederError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        raise click.Abort()

    click.echo("⚙️  Push-Pull Feeder Configuration")
    click.echo("=" * 50)
    click.echo(f"Feeder Name: {settings.feeder_name}")
    click.echo(f"Calibration Trigger: {settings.calibration_trigger.name}")
    click.echo(f"Pipeline Type: {settings.pipeline_type.name}")
    click.echo(f"Pick Z Offset: {settings.pick_z_offset}mm")
    click.echo(f"Parts Per Feed: {settings.parts_per_feed}")

    click.echo("\n🎯 Calibration Tolerances:")
    click.echo(f"Min Hole Distance: {settings.min_hole_distance}mm")
    click.echo(f"Hole Pitch Tolerance: {settings.hole_pitch_tolerance}mm")
    click.echo(f"Max Vision Correction: {settings.max_vision_correction}mm")
    click.echo(f"Min Vision Confidence: {settings.min_vision_confidence}")
    click.echo(f"Vision Fallback: {settings.vision_fallback}")

    click.echo("\n🔌 Hardware:")
    click.echo(f"Actuator Port: {settings.actuator_port} @ {settings.actuator_baud}")
    click.echo(f"Robot: {settings.robot_ip}:{settings.robot_port}")


@main.command()
def validate_config():
    """Validate current configuration."""
    try:
        Settings().validate_settings()
    except FeederError as e:
        click.echo(f"❌ Configuration validation failed: {e}", err=True)
        raise click.Abort()

    click.echo("✅ Configuration validation passed")


@main.command()
def tapes():
    """List standard EIA-481 tapes."""
    for name in TapePresets.names():
        tape = TapePresets.get(name)
        click.echo(
            f"{name:<10} hole pitch {tape.hole_pitch:.1f}mm, part pitch {tape.part_pitch:.1f}mm, "
            f"cavity offset ({tape.cavity_center_offset_x:.2f}, {tape.cavity_center_offset_y:.2f})mm"
        )


@main.command()
@click.option('--tape', 'tape_name', required=True, help='Tape preset, see `tapes`')
@click.option('--x', type=float, required=True, help='Top right X of the tape start')
@click.option('--y', type=float, required=True, help='Top right Y of the tape start')
@click.option('--inches', is_flag=True, help='Coordinates are in inches')
def locate(tape_name: str, x: float, y: float, inches: bool):
    """Pick and sprocket hole locations for a freshly cut tape."""
    try:
        tape = TapePresets.get(tape_name)
    except FeederError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    units = LengthUnit.INCHES if inches else LengthUnit.MILLIMETERS
    start = Location(units, x, y)
    pick_location = pick_location_from_start(tape, start)

    click.echo(f"📍 Pick:   {pick_location}")
    click.echo(f"⚪ Hole 1: {get_hole1_location(tape, pick_location)}")
    click.echo(f"⚪ Hole 2: {get_hole2_location(tape, pick_location)}")


@main.command()
@click.option('--tape', 'tape_name', required=True, help='Tape preset, see `tapes`')
@click.option('--hole1', type=(float, float), required=True, help='Sprocket hole 1 X Y (mm)')
@click.option('--hole2', type=(float, float), required=True, help='Sprocket hole 2 X Y (mm)')
@click.option('--count', '-n', type=int, default=1, show_default=True, help='Number of feeds')
@click.option('--feed-actuator', default='FEED', show_default=True, help='Feed actuator channel')
@click.option('--peel-actuator', default=None, help='Peel actuator channel (optional)')
@click.pass_context
def feed(ctx, tape_name: str, hole1: Tuple[float, float], hole2: Tuple[float, float], count: int,
         feed_actuator: str, peel_actuator: Optional[str]):
    """Feed through the feeder board using entered sprocket holes (no vision)."""
    board = None
    try:
        settings = Settings()
        settings.log_level = ctx.obj['log_level']
        tape = TapePresets.get(tape_name)

        board = FeederBoardService(settings)
        board.connect()

        feeder = PushPullFeeder(
            tape,
            settings=settings,
            feed_actuator=SerialActuator(board, feed_actuator),
            rotation_actuator=SerialActuator(board, peel_actuator) if peel_actuator else None
        )
        feeder.calibration_trigger = CalibrationTrigger.NONE
        feeder.set_hole_locations(
            Location(LengthUnit.MILLIMETERS, *hole1),
            Location(LengthUnit.MILLIMETERS, *hole2)
        )

        for _ in range(count):
            pick_location = feeder.feed("cli")
            click.echo(f"✅ Feed {feeder.feed_count}: pick at {pick_location}")

    except InvalidCalibrationError as e:
        click.echo(f"❌ CALIBRATION INVALID: {e}", err=True)
        raise click.Abort()
    except FeederError as e:
        click.echo(f"❌ FEED FAILED: {e}", err=True)
        raise click.Abort()
    finally:
        if board is not None and board.connected:
            board.disconnect()


@main.command()
@click.argument('actuators', nargs=-1)
def test_actuators(actuators):
    """Test feeder board communication and read actuators."""
    board = None
    try:
        board = FeederBoardService(Settings())
        board.connect()
        click.echo("✅ Feeder board communication OK")

        for name in actuators:
            click.echo(f"📊 {name}: {SerialActuator(board, name).read()}")

    except FeederError as e:
        click.echo(f"❌ Actuator test failed: {e}", err=True)
        raise click.Abort()
    finally:
        if board is not None and board.connected:
            board.disconnect()


if __name__ == '__main__':
    main()
