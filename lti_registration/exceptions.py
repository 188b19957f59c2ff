"""
Exceptions raised during the LTI 1.3 Dynamic Registration flow.

Every exception carries the HTTP status code the views answer with.
"""


class LtiRegistrationError(Exception):
    """
    Base exception for the registration flow. Subclasses provide a default
    message and the status code used when the error reaches a view.
    """
    message = "Something went wrong."
    status_code = 500

    def __init__(self, message=None):
        if not message:
            message = self.message
        self.message = message
        super().__init__(message)


class ValidationError(LtiRegistrationError):
    """
    The request parameters are missing or malformed.
    """
    message = "The registration request is not valid."
    status_code = 400

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class RegistrationNotStartedError(LtiRegistrationError):
    message = "Registration not started."
    status_code = 400


class DuplicateRegistrationError(LtiRegistrationError):
    message = "Platform already registered."
    status_code = 409


class UpstreamError(LtiRegistrationError):
    """
    The platform could not be reached, answered with an error status or
    returned a document that could not be parsed.
    """
    message = "The platform returned an invalid response."


class KeyGenerationError(LtiRegistrationError):
    message = "The tool key pair could not be generated."


class InternalError(LtiRegistrationError):
    pass
