class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record (employee, absence, request) does not exist."""


class AuthorizationError(DomainError):
    """Raised when the current role lacks permission for an action."""


class SessionLockedError(AuthorizationError):
    """Raised while the inactivity lock is engaged."""


class InvalidTransitionError(DomainError):
    """Raised when a workflow action is not allowed in the current step."""


class CameraError(Exception):
    """Camera stream could not be acquired."""


class CameraPermissionDenied(CameraError):
    pass


class CameraUnsupported(CameraError):
    pass


class CameraDeviceError(CameraError):
    pass


class FrameNotReadyError(CameraError):
    """The stream has not buffered a usable frame yet."""


class GeolocationError(Exception):
    """Device position could not be obtained."""


class GeolocationPermissionDenied(GeolocationError):
    pass


class GeolocationUnsupported(GeolocationError):
    pass


class GeolocationTimeout(GeolocationError):
    pass


class RegistrationError(Exception):
    """Punch registration call failed."""


class RegistrationNetworkError(RegistrationError):
    pass


class RegistrationServerError(RegistrationError):
    pass
