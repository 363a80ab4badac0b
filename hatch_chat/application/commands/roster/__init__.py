"""Roster commands."""

from .create_roster import (
    CreateAgentCommand,
    CreateAgentHandler,
    CreateProjectCommand,
    CreateProjectHandler,
    CreateTeamCommand,
    CreateTeamHandler,
)

__all__ = [
    "CreateProjectCommand",
    "CreateProjectHandler",
    "CreateTeamCommand",
    "CreateTeamHandler",
    "CreateAgentCommand",
    "CreateAgentHandler",
]
