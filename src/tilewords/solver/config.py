"""Tilewords solver configuration."""

from typing import Literal

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Tilewords solver.

    Values can be overridden with `TILEWORDS_*` environment variables or a `.env` file.
    """

    temperature: float = Field(default=0.35, ge=0.0, le=1.0)
    """Probability of shuffling candidate and orientation order instead of using the
    heuristic order. 0 gives a purely heuristic search. Default: 0.35."""

    max_states: int = Field(default=1_200_000, gt=0)
    """Maximum number of search states explored per seed word. Default: 1,200,000."""

    rows: int = Field(default=21, gt=0)
    """Number of board rows. Default: 21."""

    cols: int = Field(default=21, gt=0)
    """Number of board columns. Default: 21."""

    word_list_path: str = "words.txt"
    """Path of the word list, one word per line. A built-in list is used if missing."""

    min_word_length: int = Field(default=1, ge=1)
    """Shortest dictionary word to use. Default: 1 (no filtering)."""

    random_seed: int | None = None
    """Seed for the random source. If None (default), runs are not reproducible."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    """Level of the `tilewords` logger during a run. Default: INFO."""

    model_config = SettingsConfigDict(
        env_prefix="TILEWORDS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


config = SolverConfig()
