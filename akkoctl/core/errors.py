"""Domain-specific errors for akkoctl."""


class AkkoctlError(Exception):
    """Base error for akkoctl."""


class ModelCatalogError(AkkoctlError):
    """Base error for the device-model table."""


class ModelValidationError(ModelCatalogError):
    """Raised when a model file does not conform to schema or semantics."""


class ModelLoadError(ModelCatalogError):
    """Raised when reading model sources fails."""


class ModelResolutionError(AkkoctlError):
    """Raised when a model name does not resolve to a known descriptor."""


class InvalidParameterError(AkkoctlError):
    """Raised when a command argument is outside its wire range."""


class UnsupportedPacketSize(AkkoctlError):
    """Raised when a raw packet is not exactly one frame long."""


class DeviceError(AkkoctlError):
    """Base device error."""


class DeviceNotFound(DeviceError):
    """Raised when no HID endpoint matches the vendor/product pair."""


class InterfaceOpenFailure(DeviceError):
    """Raised when a matching endpoint cannot be opened."""


class TransportIoError(DeviceError):
    """Raised when a Feature Report write or read fails."""
