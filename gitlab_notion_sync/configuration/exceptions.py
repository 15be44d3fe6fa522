"""Contains exceptions raised when reconciling application configuration."""


class ConfigurationError(Exception):
    """Base class for configuration problems detected before any remote call."""

    pass


class RequiredConfigurationElementError(ConfigurationError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Missing required configuration element: {name} (command line option {cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class MissingConfigurationError(ConfigurationError):
    """Raised when several required configuration elements are missing."""

    def __init__(self, missing: list[RequiredConfigurationElementError]) -> None:
        """Initializes the exception with every missing element."""
        super().__init__(
            "Missing required configuration elements: "
            + ", ".join(f"{element.name} (command line option {element.cli_name}, environment variable {element.env_name})" for element in missing)
        )
        self.missing = missing


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration element has an unusable value."""

    pass
