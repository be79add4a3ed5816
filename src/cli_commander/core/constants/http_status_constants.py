"""Constants for HTTP status messages."""

HTTP_401_UNAUTHORIZED_MESSAGE = "Unauthorized"
