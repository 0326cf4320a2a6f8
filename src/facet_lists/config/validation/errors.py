"""Config validation errors."""
from facet_lists.kernel.errors import ConfigurationError


class ConfigError(ConfigurationError):
    """Raised when settings are invalid or loading them failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing", option=setting_name)
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but cannot be used."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            option=setting_name,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
