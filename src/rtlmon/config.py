"""Config-file loading and defaults.

The config file is optional; every key has a default.  A minimal
file looks like::

    [decoder]
    command = "rtl_433"
    args = ["-f", "433.92M"]

    [http]
    host = "127.0.0.1"
    port = 3000
"""

import tomllib

DEFAULT_COMMAND = "rtl_433"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def default_config() -> dict:
    """Return the config used when no file is given."""
    return {
        "decoder_command": DEFAULT_COMMAND,
        "decoder_args": [],
        "host": DEFAULT_HOST,
        "port": DEFAULT_PORT,
    }


def load_config(path: str) -> dict:
    """Read a TOML config file, validate it and fill in defaults.

    Keys: ``[decoder]`` with ``command`` (str) and ``args``
    (list[str]); ``[http]`` with ``host`` (str) and ``port`` (int,
    1-65535).  Sections and keys may be omitted.

    Raises:
        ValueError: If a key has the wrong type or the port is out
            of range.
    """
    with open(path, "rb") as f:
        raw = tomllib.load(f)

    result = default_config()

    decoder = _section(raw, "decoder")
    if "command" in decoder:
        _require_str(decoder, "command", "decoder.command")
        if not decoder["command"]:
            raise ValueError("decoder.command must not be empty")
        result["decoder_command"] = decoder["command"]
    if "args" in decoder:
        _require_str_list(decoder, "args", "decoder.args")
        result["decoder_args"] = list(decoder["args"])

    http = _section(raw, "http")
    if "host" in http:
        _require_str(http, "host", "http.host")
        result["host"] = http["host"]
    if "port" in http:
        _require_int(http, "port", "http.port")
        if http["port"] < 1 or http["port"] > 65535:
            raise ValueError("http.port must be 1-65535, got %d" % http["port"])
        result["port"] = http["port"]

    return result


def _section(raw: dict[str, object], name: str) -> dict:
    """Return table *name* from *raw*, or an empty dict if absent."""
    if name not in raw:
        return {}
    if not isinstance(raw[name], dict):
        raise ValueError("[%s] must be a table" % name)
    return raw[name]


def _require_str(raw: dict[str, object], key: str, label: str) -> None:
    """Validate that *key* in *raw* is a str."""
    if not isinstance(raw[key], str):
        raise ValueError("%s must be str, got %s" % (label, type(raw[key]).__name__))


def _require_int(raw: dict[str, object], key: str, label: str) -> None:
    """Validate that *key* in *raw* is an int."""
    if isinstance(raw[key], bool) or not isinstance(raw[key], int):
        raise ValueError("%s must be int, got %s" % (label, type(raw[key]).__name__))


def _require_str_list(raw: dict[str, object], key: str, label: str) -> None:
    """Validate that *key* in *raw* is a list of str."""
    if not isinstance(raw[key], list):
        raise ValueError("%s must be a list of str" % label)
    for i, v in enumerate(raw[key]):
        if not isinstance(v, str):
            raise ValueError(
                "%s[%d] must be str, got %s" % (label, i, type(v).__name__)
            )
