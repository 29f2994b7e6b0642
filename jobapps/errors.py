"""
Error types raised by the application and job services.

Routes translate these into HTTP responses; PublicationError is absorbed
inside the services and never reaches a caller.
"""


class ServiceError(Exception):
    """Base class for every error this service raises on purpose."""


class BadPayloadError(ServiceError):
    """Request body could not be decoded into a JSON object."""


class MissingRequiredFieldError(ServiceError):
    """A required identifier is absent from the application."""


class DuplicateApplicationError(ServiceError):
    """The candidate already has an application for this job."""

    def __init__(self, message: str = "candidate has already applied for this job"):
        super().__init__(message)


class StorageUnavailableError(ServiceError):
    """The document store failed or did not answer in time."""


class PublicationError(ServiceError):
    """A message could not be handed to the message bus."""


class JobNotFoundError(ServiceError):
    """No job exists with the requested id."""
