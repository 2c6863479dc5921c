"""Component usage inspector: filtering and distribution analysis over usage payloads."""

__version__ = "0.1.0"
