"""Upload processing exceptions."""

from photoprint.services.exceptions import ValidationError


class InvalidUpload(ValidationError):
    """Uploaded file is missing, too large or not a decodable image."""

    pass
