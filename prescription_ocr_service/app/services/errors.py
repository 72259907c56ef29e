# app/services/errors.py

class UserFacingError(Exception):
    """Error whose message is safe to show to the person who uploaded the image."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class UploadValidationError(UserFacingError):
    status_code = 400

class OCRFailure(UserFacingError):
    status_code = 502

class NoTextFoundError(OCRFailure):
    status_code = 422

UNEXPECTED_ERROR_MESSAGE = "Failed to extract prescription. Please try again."
