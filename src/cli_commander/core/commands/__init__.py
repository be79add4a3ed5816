from .base import (
    AppCommandContext,
    BaseCommand,
    CommandContext,
    command_registry,
    register_command,
)
from .create_job_cmd import CreateJobCommand
from .delete_job_cmd import DeleteJobCommand

# Import command modules to ensure registration
from .help_cmd import HelpCommand
from .list_jobs_cmd import ListJobsCommand
from .registry import CommandRegistry
from .version_cmd import VersionCommand
from .who_am_i_cmd import WhoAmICommand

__all__ = [
    "AppCommandContext",
    "BaseCommand",
    "CommandContext",
    "CommandRegistry",
    "CreateJobCommand",
    "DeleteJobCommand",
    "HelpCommand",
    "ListJobsCommand",
    "VersionCommand",
    "WhoAmICommand",
    "command_registry",
    "register_command",
]
