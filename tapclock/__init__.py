"""Tap-tempo MIDI clock: clock generation, message parsing, panel model and tempo counter."""

__version__ = "0.1.0"
__all__ = ["debounce", "squeue", "midi", "count", "panel", "controller"]