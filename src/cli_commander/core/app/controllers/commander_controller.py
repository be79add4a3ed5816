"""
Commander controller exposing the command gateway endpoints.

The run endpoint is a plain ``def`` so FastAPI executes it on a worker thread:
each request occupies its own thread for the whole command run.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Query, Request
from pydantic import ConfigDict, Field

from cli_commander.core.constants import COMMAND_LINE_FIELD, COMMANDER_URL_NAME
from cli_commander.core.domain.identity import CallerIdentity
from cli_commander.core.interfaces.model_bases import DomainModel
from cli_commander.core.security.middleware import get_caller_identity
from cli_commander.core.services.commander_service import CommanderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"/{COMMANDER_URL_NAME}", tags=["commander"])


class CommandOutputResponse(DomainModel):
    """Captured output of a completed command."""

    model_config = ConfigDict(populate_by_name=True)

    stdout: str
    stderr: str
    exit_code: int = Field(alias="exitCode")


class ErrorResponse(DomainModel):
    error: str
    type: str | None = None


class SuggestionsResponse(DomainModel):
    suggestions: list[str]


class CommandInfo(DomainModel):
    name: str
    description: str
    usage: str


class CommandListResponse(DomainModel):
    commands: list[CommandInfo]


def get_commander_service(request: Request) -> CommanderService:
    return request.app.state.commander_service  # type: ignore[no-any-return]


@router.post(
    "",
    response_model=CommandOutputResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@router.post("/", include_in_schema=False)
def run_command(
    command_line_form: str | None = Form(None, alias=COMMAND_LINE_FIELD),
    command_line_query: str | None = Query(None, alias=COMMAND_LINE_FIELD),
    caller: CallerIdentity = Depends(get_caller_identity),
    service: CommanderService = Depends(get_commander_service),
) -> CommandOutputResponse:
    """Run a command line as the calling user.

    The command line is read from the form body, or from the query string
    when the form does not carry it.
    """
    command_line = (
        command_line_form if command_line_form is not None else command_line_query
    )
    result = service.run(command_line, caller)
    return CommandOutputResponse(
        stdout=result.stdout, stderr=result.stderr, exit_code=result.exit_code
    )


@router.get("/autoCompleteCommandLine", response_model=SuggestionsResponse)
async def auto_complete_command_line(
    value: str = Query("", description="Partial command line"),
    service: CommanderService = Depends(get_commander_service),
) -> SuggestionsResponse:
    return SuggestionsResponse(suggestions=service.suggest(value))


@router.get("/commands", response_model=CommandListResponse)
async def list_commands(
    service: CommanderService = Depends(get_commander_service),
) -> CommandListResponse:
    return CommandListResponse(
        commands=[
            CommandInfo(name=d.name, description=d.description, usage=d.usage)
            for d in service.describe_commands()
        ]
    )
