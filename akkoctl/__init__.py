"""Configuration backend for Akko keyboards over HID Feature Reports."""

__version__ = "0.1.0"
