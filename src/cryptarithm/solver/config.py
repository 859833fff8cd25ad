"""Cryptarithm solver configuration."""

from typing import Literal

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the cryptarithm solver.

    Every field can be overridden by an environment variable prefixed with
    ``CRYPTARITHM_`` (e.g. ``CRYPTARITHM_DEBUG=1``), or by the same key in a ``.env`` file.
    """

    default_operator: Literal["+", "*"] = "+"
    """Operator used when none is given on the command line. Default: "+"."""

    report_interval: int = 100_000
    """Interval (in number of digit bindings tried) at which to report progress.

    0 disables progress reports. Default: 100000.
    """

    general_report_interval: int = 1_000_000
    """Interval (in number of permutations tried) for progress of the general solver."""

    debug: bool = False
    """Whether to trace every column step of the search to the log stream. Default: False."""

    log_dir: str = "logs"
    """Directory under which `solver.run` writes one log file per puzzle."""

    model_config = SettingsConfigDict(
        env_prefix="CRYPTARITHM_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


config = SolverConfig()
