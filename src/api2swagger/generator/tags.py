"""Interprets field tags (validate, example and location-tag options) as schema constraints.

Values that cannot be interpreted for the field's type are skipped: the field
simply goes without that constraint.
"""

import logging
import math
import re
from typing import Any

from api2swagger.generator.swagger import Constraints
from api2swagger.parser.base import Tag

logger = logging.getLogger(__name__)

TAG_HEADER = "header"
TAG_PATH = "path"
TAG_FORM = "form"
TAG_JSON = "json"
TAG_VALIDATE = "validate"
TAG_EXAMPLE = "example"
LOCATION_TAGS = (TAG_HEADER, TAG_PATH, TAG_FORM, TAG_JSON)

OPTION_DEFAULT = "default"
OPTION_OPTIONS = "options"
OPTION_RANGE = "range"
OPTION_EXAMPLE = "example"
OPTIONAL_OPTIONS = ("optional", "omitempty")
OPTION_SEPARATOR = "|"

RANGE_PATTERN = re.compile(r"\[([+-]?\d+(?:\.\d+)?):([+-]?\d+(?:\.\d+)?)\]")

TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
    value = value.strip()
    if value in TRUE_LITERALS:
        return True
    if value in FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {value!r}")


def parse_number(value: str) -> int | float:
    """Parse a number, keeping integral literals as int."""
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number: {value!r}")
    return number


def parse_length(value: str) -> int:
    length = int(value.strip())
    if length < 0:
        raise ValueError(f"negative length: {value!r}")
    return length


def parse_range_option(value: str) -> tuple[int | float, int | float] | None:
    """Parse `[min:max]`. A reversed range collapses to `[min:min]`."""
    match = RANGE_PATTERN.search(value)
    if not match:
        return None
    low, high = parse_number(match.group(1)), parse_number(match.group(2))
    if high < low:
        return low, low
    return low, high


def coerce_value(schema_type: str | None, raw: str) -> Any:
    """Convert a tag literal to the JSON type of the field. Raises ValueError."""
    if schema_type == "integer":
        return int(raw.strip())
    if schema_type == "number":
        return parse_number(raw)
    if schema_type == "boolean":
        return parse_bool(raw)
    return raw


def _coerce_or_raw(schema_type: str | None, raw: str) -> Any:
    try:
        return coerce_value(schema_type, raw)
    except ValueError:
        return raw


def split_option(option: str) -> tuple[str, str | None]:
    key, sep, value = option.partition("=")
    return key.strip(), value if sep else None


def is_required(tag: Tag) -> bool:
    """A location tag is required unless one of its options marks it optional."""
    return not any(split_option(option)[0] in OPTIONAL_OPTIONS for option in tag.options)


def fill_validate(target: Constraints, tag: Tag) -> None:
    """Apply a `validate` tag; its name and each option are one rule apiece."""
    if tag.key != TAG_VALIDATE:
        return
    for rule in [tag.name, *tag.options]:
        try:
            fill_validate_option(target, rule)
        except ValueError as e:
            logger.debug("skipping validate rule %r: %s", rule, e)


def fill_validate_option(target: Constraints, option: str) -> None:
    key, value = split_option(option)
    if value is None:
        return

    schema_type = getattr(target, "type", None)
    if key == "oneof":
        # oneof='red green' 'blue yellow'
        if "'" in value:
            values = value.split("' '")
            values[0] = values[0].removeprefix("'")
            values[-1] = values[-1].removesuffix("'")
        else:
            values = [v for v in value.split(" ") if v]
        target.enum = [_coerce_or_raw(schema_type, v) for v in values]
    elif key in ("min", "gte", "gt"):
        if schema_type in ("number", "integer"):
            target.minimum = parse_number(value)
            if key == "gt":
                target.exclusive_minimum = True
        elif schema_type == "array":
            target.min_items = parse_length(value)
        elif schema_type == "string":
            target.min_length = parse_length(value)
    elif key in ("max", "lte", "lt"):
        if schema_type in ("number", "integer"):
            target.maximum = parse_number(value)
            if key == "lt":
                target.exclusive_maximum = True
        elif schema_type == "array":
            target.max_items = parse_length(value)
        elif schema_type == "string":
            target.max_length = parse_length(value)


def fill_example(target: Constraints, tag: Tag) -> None:
    """Apply an `example` tag, converting the value to the field's type."""
    if tag.key != TAG_EXAMPLE:
        return
    schema_type = getattr(target, "type", None)
    if schema_type == "array":
        target.example = [tag.name, *tag.options]
        return
    if schema_type not in ("string", "integer", "number", "boolean"):
        return
    try:
        target.example = coerce_value(schema_type, tag.name)
    except ValueError:
        logger.debug("skipping %s example %r", schema_type, tag.name)


def fill_options(target: Constraints, tag: Tag) -> None:
    """Apply the default/options/range/example options of a location tag."""
    schema_type = getattr(target, "type", None)
    for option in tag.options:
        key, value = split_option(option)
        if value is None:
            continue
        if key == OPTION_DEFAULT:
            target.default = _coerce_or_raw(schema_type, value)
        elif key == OPTION_OPTIONS:
            target.enum = [_coerce_or_raw(schema_type, v) for v in value.split(OPTION_SEPARATOR)]
        elif key == OPTION_RANGE:
            try:
                bounds = parse_range_option(value)
            except ValueError:
                bounds = None
            if bounds is not None:
                target.minimum, target.maximum = bounds
        elif key == OPTION_EXAMPLE:
            try:
                target.example = coerce_value(schema_type, value)
            except ValueError:
                logger.debug("skipping %s example option %r", schema_type, value)
