"""
Utility functions for CLI operations.

Functions here turn command-line arguments into request inputs: headers,
variables and the query document.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional


def parse_headers(header_strings: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse header strings into a dictionary.

    Args:
        header_strings: Header strings in "Name: value" format, or None

    Returns:
        Dictionary with header names as keys and values as strings

    Raises:
        ValueError: If a header has no ":" separator

    Example:
        ```python
        headers = parse_headers(["Authorization: Bearer token"])
        # Returns: {"Authorization": "Bearer token"}
        ```
    """
    headers: Dict[str, str] = {}
    for header_string in header_strings or []:
        if ":" not in header_string:
            raise ValueError(f"Invalid header format: {header_string!r}")
        key, value = header_string.split(":", 1)
        headers[key.strip()] = value.strip()
    return headers


def parse_variables(
    var_strings: Optional[List[str]], variables_file: Optional[Path] = None
) -> Optional[Dict[str, Any]]:
    """
    Build the variables mapping from a JSON file and NAME=VALUE arguments.

    Each VALUE is decoded as JSON when possible (``count=3`` gives an int,
    ``ids=[1,2]`` a list) and kept as a string otherwise.

    Returns:
        The variables, or None when neither source was given

    Raises:
        ValueError: On a malformed argument or a file that is not a JSON object
    """
    if variables_file is None and not var_strings:
        return None

    variables: Dict[str, Any] = {}
    if variables_file is not None:
        loaded = json.loads(variables_file.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{variables_file} must contain a JSON object")
        variables.update(loaded)

    for var_string in var_strings or []:
        name, sep, raw = var_string.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Invalid variable format: {var_string!r} (expected NAME=VALUE)")
        try:
            variables[name.strip()] = json.loads(raw)
        except json.JSONDecodeError:
            variables[name.strip()] = raw

    return variables


def load_query(query: Optional[str], query_file: Optional[Path]) -> str:
    """Return the query text from the argument or the file."""
    if query is not None:
        return query
    if query_file is None:
        raise ValueError("No query given")
    return query_file.read_text(encoding="utf-8")


def format_data(data: Any, compact: bool = False) -> str:
    """Render decoded data as JSON."""
    if compact:
        return json.dumps(data, ensure_ascii=False, default=str, separators=(",", ":"))
    return json.dumps(data, ensure_ascii=False, default=str, indent=2)
