import logging
from typing import List, Optional

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
from wellbeing.definition import (
    AllowedValue,
    CategoryTypes,
    Definition,
    DefinitionRepository,
    OrphanValue,
)
from wellbeing.entry import Entry, EntryRepository
from wellbeing.insights import InsightService
from wellbeing.store import Store

logger = logging.getLogger(__name__)


class CommandHandler:
    """
    One method per use case, each delegating to a repository.

    This is the public surface of the well-being log; the HTTP layer and the
    CLI only talk to the handler.
    """

    def __init__(self, entries: EntryRepository, definitions: DefinitionRepository):
        self.entries = entries
        self.definitions = definitions
        self.insights = InsightService(entries, definitions)

    @classmethod
    def for_store(cls, store: Store) -> "CommandHandler":
        return cls(EntryRepository(store), DefinitionRepository(store))

    # Entries

    def set_data(self, command: SetWellBeingDataCmd) -> Entry:
        logger.info("Saving %s/%s for %s", command.data.category, command.data.type, command.data.date)
        return self.entries.add_or_replace(command.data)

    def delete_data(self, command: DeleteWellBeingDataCmd) -> None:
        logger.info("Deleting %s/%s for %s", command.category, command.type, command.date)
        self.entries.remove_by_key(command.date, command.category, command.type)

    def get_data(self, command: GetWellBeingDataCmd) -> Optional[Entry]:
        return self.entries.get_by_key(command.date, command.category, command.type)

    def get_all_data(self, command: GetAllWellBeingDataCmd) -> List[Entry]:
        return self.entries.list_all(
            command.start_date, command.end_date, command.category_and_types
        )

    # Definitions

    def create_type(self, command: CreateWellBeingTypeCmd) -> Definition:
        logger.info("Creating type %s/%s", command.category, command.type)
        return self.definitions.create_type(command.category, command.type, command.allow_multiple)

    def delete_type(self, command: DeleteWellBeingTypeCmd) -> None:
        logger.info("Deleting type %s/%s", command.category, command.type)
        self.definitions.delete_type(command.category, command.type)

    def add_value(self, command: AddWellBeingValueCmd) -> AllowedValue:
        logger.info("Adding value %s to %s", command.value, command.type)
        return self.definitions.add_value(command.type, command.value, command.notable)

    def delete_value(self, command: DeleteWellBeingValueCmd) -> None:
        logger.info("Deleting value %s from %s", command.value, command.type)
        self.definitions.delete_value(command.type, command.value)

    def get_definitions(self, command: GetWellBeingDefinitionsCmd) -> List[Definition]:
        return self.definitions.get_definitions_for_category(command.category)

    def get_values(self, command: GetWellBeingValuesCmd) -> List[AllowedValue]:
        return self.definitions.get_values_for_type(command.type)

    def get_catalogue(self) -> List[CategoryTypes]:
        return self.definitions.get_all_categories_and_types()

    # Maintenance and aggregation

    def find_orphan_values(self) -> List[OrphanValue]:
        return self.definitions.find_orphan_values()

    def clean_orphan_values(self) -> int:
        return self.definitions.delete_orphan_values()

    def get_summary(self, command: GetAllWellBeingDataCmd) -> dict:
        return self.insights.summarize(
            command.start_date, command.end_date, command.category_and_types
        )
