from flask import Blueprint, current_app, jsonify, request

from wellbeing.commands import (
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
from wellbeing.errors import ValidationError

bp = Blueprint("commands", __name__)


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _handler():
    return current_app.command_handler


@bp.route("/addWBData", methods=["POST"])
def add_data():
    """Store an entry, replacing any entry with the same date, category and type."""
    entry = _handler().set_data(SetWellBeingDataCmd.from_json(_payload()))
    return jsonify({"status": "ok", "data": entry.to_dict()})


@bp.route("/deleteWBData", methods=["POST"])
def delete_data():
    """Delete an entry by key."""
    _handler().delete_data(DeleteWellBeingDataCmd.from_json(_payload()))
    return jsonify({"status": "ok"})


@bp.route("/getWBData", methods=["POST"])
def get_data():
    """Get a single entry by key."""
    entry = _handler().get_data(GetWellBeingDataCmd.from_json(_payload()))
    if entry is None:
        return jsonify({"error": "Entry not found"}), 404
    return jsonify(entry.to_dict())


@bp.route("/getAll", methods=["POST"])
def get_all():
    """List entries filtered by date range and (category, type) pairs."""
    entries = _handler().get_all_data(GetAllWellBeingDataCmd.from_json(_payload()))
    return jsonify([entry.to_dict() for entry in entries])


@bp.route("/createWBType", methods=["POST"])
def create_type():
    """Create a type definition."""
    definition = _handler().create_type(CreateWellBeingTypeCmd.from_json(_payload()))
    return jsonify(definition.to_dict()), 201


@bp.route("/deleteWBType", methods=["POST"])
def delete_type():
    """Delete a type definition."""
    _handler().delete_type(DeleteWellBeingTypeCmd.from_json(_payload()))
    return jsonify({"status": "ok"})


@bp.route("/addWBValue", methods=["POST"])
def add_value():
    """Add an allowed value to a type."""
    value = _handler().add_value(AddWellBeingValueCmd.from_json(_payload()))
    return jsonify(value.to_dict()), 201


@bp.route("/deleteWBValue", methods=["POST"])
def delete_value():
    """Remove an allowed value from a type."""
    _handler().delete_value(DeleteWellBeingValueCmd.from_json(_payload()))
    return jsonify({"status": "ok"})


@bp.route("/getWBDefinitions", methods=["POST"])
def get_definitions():
    """List the definitions of a category with their values."""
    definitions = _handler().get_definitions(GetWellBeingDefinitionsCmd.from_json(_payload()))
    return jsonify([definition.to_dict() for definition in definitions])


@bp.route("/getWBValues", methods=["POST"])
def get_values():
    """List the allowed values of a type."""
    values = _handler().get_values(GetWellBeingValuesCmd.from_json(_payload()))
    return jsonify({"values": [value.to_dict() for value in values]})


@bp.route("/catalogue", methods=["GET"])
def get_catalogue():
    """List every category with its types."""
    catalogue = _handler().get_catalogue()
    return jsonify([item.to_dict() for item in catalogue])


@bp.route("/summary", methods=["POST"])
def get_summary():
    """Aggregate entries for the dashboard."""
    payload = request.get_json(silent=True) or {}
    summary = _handler().get_summary(GetAllWellBeingDataCmd.from_json(payload))
    return jsonify(summary)
