"""Turn switch, pot, encoder and drum-pad readings into MIDI messages."""

__version__ = "0.1.0"
__all__ = ["common", "timing", "drum", "encoder", "pot", "switch"]