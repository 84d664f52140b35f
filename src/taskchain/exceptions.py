class TaskchainError(Exception):
    """Base exception type"""


# -----------------------------------------------------
# Top-level error categories
# use these as a mixin with another base exception type
# -----------------------------------------------------


class ConfigError(TaskchainError):
    """Base config error type"""


# --------------------------------------------------
# Actual error types you should use
# --------------------------------------------------


class ConfigMissingError(ConfigError, ValueError):
    """
    One or more settings required to build a gateway or advisor are unset
    """

    def __init__(self, missing: list[str], section: str = "ledger"):
        self.missing = missing
        self.section = section
        env_names = ", ".join(f"TASKCHAIN_{section.upper()}__{name.upper()}" for name in missing)
        super().__init__(
            f"Missing required {section} settings: {', '.join(missing)}. Set {env_names}"
        )


class AbiLoadError(ConfigError, ValueError):
    """
    The contract interface descriptor could not be read or has no ``abi`` list
    """


class AdvisoryError(TaskchainError, RuntimeError):
    """
    The advisory service returned no usable advice
    """
