"""Configuration parser for the benchmark."""

from pathlib import Path
from typing import Optional, cast


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when any of the configuration settings is not provided."""


class ConfigValueError(Exception):
    """Raised when a numeric setting is outside of its allowed range."""


class BenchmarkConfig:
    """A class to save benchmark configuration settings."""

    def __init__(
        self,
        data_size: int,
        key_length: int,
        query_count: int,
        prefix_length: int,
        seed: int,
        save_plots: bool,
        keys_path: Optional[Path] = None,
    ) -> None:
        """Initialize the benchmark configuration.

        Args:
            data_size (int): The number of keys inserted in each structure.
            key_length (int): The maximum length of the generated keys.
            query_count (int): The number of lookups and prefix queries.
            prefix_length (int): The length of the queried prefixes.
            seed (int): The seed of the random generator.
            save_plots (bool): Whether to save the result charts.
            keys_path (Optional[Path]): A file to read the keys from,
            one per line, instead of generating them.

        """
        self.data_size = data_size
        self.key_length = key_length
        self.query_count = query_count
        self.prefix_length = prefix_length
        self.seed = seed
        self.save_plots = save_plots
        self.keys_path = keys_path

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Benchmark configuration settings:
                Data size: {self.data_size}
                Key length: {self.key_length}
                Query count: {self.query_count}
                Prefix length: {self.prefix_length}
                Seed: {self.seed}
                Save plots: {"YES" if self.save_plots else "NO"}
                Keys file: {self.keys_path if self.keys_path else "GENERATED"}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def parse_positive_int(key: str, val: str) -> int:
    """Parse a strictly positive integer setting.

    Args:
        key (str): The key to parse the integer for.
        val (str): The value to be parsed.

    Raises:
        ValueError: If the value is not an integer.
        ConfigValueError: If the value is zero or negative.

    Returns:
        int: The parsed integer.

    """
    number = int(val)
    if number <= 0:
        raise ConfigValueError(
            f"Invalid value for key '{key}' in the configuration file. "
            f"Expected a positive integer, got {number}.",
        )
    return number


def load_config_file(config_file_path: Path) -> BenchmarkConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing or invalid.
        FileNotFoundError: If a file does not exist.

    Returns:
        BenchmarkConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    # Initialize variables for required config values
    data_size = key_length = query_count = prefix_length = None
    seed = save_plots = None
    keys_path: Optional[Path] = None

    # Open and read the configuration file line by line
    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            # Split the line into key and value
            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            # Parse and assign configuration values based on key
            if key == "data_size":
                data_size = parse_positive_int("data_size", value)
            elif key == "key_length":
                key_length = parse_positive_int("key_length", value)
            elif key == "query_count":
                query_count = parse_positive_int("query_count", value)
            elif key == "prefix_length":
                prefix_length = parse_positive_int("prefix_length", value)
            elif key == "seed":
                seed = int(value)
            elif key == "save_plots":
                save_plots = parse_bool("save_plots", value)
            elif key == "keys_path":
                keys_path = Path(value)

    # Collect required configuration values for validation
    required = {
        "data_size": data_size,
        "key_length": key_length,
        "query_count": query_count,
        "prefix_length": prefix_length,
        "seed": seed,
        "save_plots": save_plots,
    }

    # Check for missing required configuration values
    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                f"Please ensure the config file includes a valid line for "
                f"'{key}'.",
            )

    # Check if the keys file exists
    if keys_path is not None and not keys_path.exists():
        raise FileNotFoundError(
            f"The required file {keys_path} doesn't exist.",
        )

    # Return a BenchmarkConfig object with the parsed values
    return BenchmarkConfig(
        cast("int", data_size),
        cast("int", key_length),
        cast("int", query_count),
        cast("int", prefix_length),
        cast("int", seed),
        cast("bool", save_plots),
        keys_path,
    )
