"""tcmctl — command-line access to the Tridion Core Service."""

__version__ = "0.1.0"
