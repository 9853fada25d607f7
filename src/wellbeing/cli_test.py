"""
Tests for the CLI commands.

Run with: pytest src/wellbeing/cli_test.py -v
"""
from datetime import date
from unittest.mock import MagicMock, patch

from wellbeing import cli
from wellbeing.commands import AddWellBeingValueCmd, CreateWellBeingTypeCmd, SetWellBeingDataCmd
from wellbeing.entry import Entry


def confirm(answer: bool) -> MagicMock:
    prompt = MagicMock()
    prompt.ask.return_value = answer
    return prompt


class TestListEntries:
    def test_prints_table(self, handler):
        handler.set_data(SetWellBeingDataCmd(Entry(date(2024, 1, 10), "observation", "mood", ["happy"])))

        with patch.object(cli, "console") as console:
            cli.list_entries(handler=handler)

        table = console.print.call_args.args[0]
        assert table.row_count == 1

    def test_no_entries(self, handler):
        with patch.object(cli, "console") as console:
            cli.list_entries(handler=handler)

        assert "No entries" in console.print.call_args.args[0]


class TestCleanOrphans:
    def test_confirmed_cleanup(self, handler):
        handler.add_value(AddWellBeingValueCmd("weather", "rain"))

        with patch("wellbeing.cli.questionary.confirm", return_value=confirm(True)):
            cli.clean_orphans(handler=handler)

        assert handler.find_orphan_values() == []

    def test_cancelled_cleanup(self, handler):
        handler.add_value(AddWellBeingValueCmd("weather", "rain"))

        with patch("wellbeing.cli.questionary.confirm", return_value=confirm(False)):
            cli.clean_orphans(handler=handler)

        assert len(handler.find_orphan_values()) == 1


class TestAddValue:
    def test_add_value_flow(self, handler):
        handler.create_type(CreateWellBeingTypeCmd("observation", "mood"))
        select = MagicMock()
        select.ask.return_value = "mood"
        text = MagicMock()
        text.ask.return_value = "calm"

        with patch("wellbeing.cli.questionary.select", return_value=select), \
                patch("wellbeing.cli.questionary.text", return_value=text), \
                patch("wellbeing.cli.questionary.confirm", return_value=confirm(True)):
            cli.add_value(handler=handler)

        values = handler.definitions.get_values_for_type("mood")
        assert [(v.value, v.notable) for v in values] == [("calm", True)]


class TestSeedCatalog:
    def test_creates_defaults_and_skips_existing(self, handler):
        handler.create_type(CreateWellBeingTypeCmd("symptom", "Headache"))

        with patch.object(cli, "console") as console:
            cli.seed_catalog(handler=handler)

        catalogue = {item.category: item.types for item in handler.get_catalogue()}
        assert catalogue["observation"] == ["alcohol", "food", "sleep", "sun exposure"]
        assert len(catalogue["symptom"]) == 4
        printed = [call.args[0] for call in console.print.call_args_list]
        assert "Skipping symptom/headache - already exists" in printed

    def test_running_twice_is_harmless(self, handler):
        with patch.object(cli, "console"):
            cli.seed_catalog(handler=handler)
            cli.seed_catalog(handler=handler)

        assert sum(len(item.types) for item in handler.get_catalogue()) == len(cli.DEFAULT_TYPES)
