"""Upload storage exceptions."""

from photoprint.services.exceptions import NotFoundError, ServiceError, ValidationError


class UploadDirectoryUnavailable(ServiceError):
    """Upload root directory is missing or cannot be listed."""

    pass


class UploadNotFound(NotFoundError):
    """Stored file does not exist."""

    pass


class InvalidUploadPath(ValidationError):
    """Relative path would escape the upload root."""

    pass
