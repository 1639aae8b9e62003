"""Command-line interface for push-pull feeder package."""
