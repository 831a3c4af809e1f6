"""MAVLink vehicle helpers: quaternions, frames, mode strings, link types, diagnostics and plugin filtering."""

__version__ = "0.1.0"

__all__ = [
    "convert",
    "diag",
    "frames",
    "links",
    "plugin_filter",
    "quaternion",
    "stringify",
]