"""Constants shared by the application and its tests."""

from .command_constants import *  # noqa: F403
from .http_status_constants import *  # noqa: F403
