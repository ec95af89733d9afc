"""Serialization module — export compiled plans to dicts and device formats."""

from plan_compiler.serialization.garmin import to_garmin_json, to_garmin_json_string
from plan_compiler.serialization.plan_dict import plan_to_dict

__all__ = ["plan_to_dict", "to_garmin_json", "to_garmin_json_string"]
