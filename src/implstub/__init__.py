"""implstub - stub Go interface implementations at the cursor."""

try:
    from importlib.metadata import version

    __version__ = version("implstub")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
