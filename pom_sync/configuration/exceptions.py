"""Contains exceptions raised when reconciling application configuration."""


class ConfigurationError(Exception):
    """Raised when the configuration cannot describe a valid synchronization."""

    pass


class InvalidConfigurationElementError(ConfigurationError):
    """Raised when a configuration element has an invalid value."""

    def __init__(self, name: str, cli_name: str, env_name: str, value: object, expected: str) -> None:
        """Initializes the exception with the name of the invalid element and what was expected."""
        super().__init__(f"Invalid value {value!r} for {name} (command line option {cli_name}, environment variable {env_name}): expected {expected}")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name
        self.value = value
