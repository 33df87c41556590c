import orjson


def dump_json(data: object, *, indent: bool = True) -> str:
    """Serialize data to a JSON string.

    Args:
        data: JSON-compatible data.
        indent: Whether to pretty-print with indentation.

    Returns:
        The JSON text.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")
