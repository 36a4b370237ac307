class ArmError(RuntimeError):
    """Base class for all robot arm errors."""
    pass


class NoDeviceError(ArmError):
    """Raised when a transfer is attempted with no attached arm."""
    pass


class TransportError(ArmError):
    """Raised when the USB transfer itself fails.

    ``code`` is the error number reported by the USB backend, unchanged.
    """
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class CommandOverflowError(ArmError):
    """Raised when a write does not fit in the command buffer."""
    pass


class FaultCopyError(ArmError):
    """Raised when caller data cannot be read as bytes."""
    pass


class InvalidArgumentError(ArmError, ValueError):
    """Raised when direct control values or a request code are rejected."""
    pass


class UnsupportedRequestError(InvalidArgumentError):
    """Raised for request codes that are declared but have no behavior."""
    pass


class ArmNotFoundError(ArmError):
    """Raised when no matching arm could be found."""
    pass


class MultipleArmsError(ArmError):
    """Raised when more than one matching arm is found."""
    def __init__(self, message, devices):
        super().__init__(message)
        self.devices = devices  # list[ArmInfo]
