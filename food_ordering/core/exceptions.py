class BusinessException(Exception):
    """Error raised by the services and translated to a JSON response at the app boundary"""

    status_code = 400

    def __init__(self, code, message, status_code=None):
        super().__init__(message)
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "code": self.code, "message": self.message}


class BadRequest(BusinessException):
    status_code = 400


class Unauthorized(BusinessException):
    status_code = 401


class Forbidden(BusinessException):
    status_code = 403


class NotFound(BusinessException):
    status_code = 404


class Conflict(BusinessException):
    status_code = 409


class InternalError(BusinessException):
    status_code = 500


class ImageUploadError(InternalError):
    def __init__(self, message="Image upload failed. Please check server logs."):
        super().__init__(code="IMAGE_UPLOAD_FAILED", message=message)
