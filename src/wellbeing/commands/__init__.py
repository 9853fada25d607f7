"""
Commands

Command payloads and the handler that maps them onto the repositories.
"""

from wellbeing.commands.handler import CommandHandler
from wellbeing.commands.models import (
    AddWellBeingValueCmd,
    CreateWellBeingTypeCmd,
    DeleteWellBeingDataCmd,
    DeleteWellBeingTypeCmd,
    DeleteWellBeingValueCmd,
    GetAllWellBeingDataCmd,
    GetWellBeingDataCmd,
    GetWellBeingDefinitionsCmd,
    GetWellBeingValuesCmd,
    SetWellBeingDataCmd,
)

__all__ = [
    "AddWellBeingValueCmd",
    "CommandHandler",
    "CreateWellBeingTypeCmd",
    "DeleteWellBeingDataCmd",
    "DeleteWellBeingTypeCmd",
    "DeleteWellBeingValueCmd",
    "GetAllWellBeingDataCmd",
    "GetWellBeingDataCmd",
    "GetWellBeingDefinitionsCmd",
    "GetWellBeingValuesCmd",
    "SetWellBeingDataCmd",
]
