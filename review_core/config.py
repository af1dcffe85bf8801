from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SPENDING_SAMPLE_CAP = 50_000
DEFAULT_TOP_RECIPIENTS = 50
DEFAULT_IMPROVEMENT_CASE_LIMIT = 10


class PipelineSettings(BaseSettings):
    """Pipeline settings, read from ``RS_*`` environment variables or ``.env``."""

    # Locations
    input_dir: Path = Field(default=Path("csv"))
    output_dir: Path = Field(default=Path("public/data"))

    # Source extracts (2024 RS system release)
    basic_info_file: str = Field(default="1-2_RS_2024_基本情報_事業概要等.csv")
    performance_file: str = Field(default="3-1_RS_2024_効果発現経路_目標・実績.csv")
    evaluation_file: str = Field(default="4-1_RS_2024_点検・評価.csv")
    spending_file: str = Field(default="5-1_RS_2024_支出先_支出情報.csv")

    # Fiscal year whose target/actual columns feed the achievement rate
    reference_year: int = Field(default=2023)

    # Randomised steps; None draws fresh entropy on every run
    seed: Optional[int] = Field(default=None)
    spending_sample_cap: int = Field(
        default=DEFAULT_SPENDING_SAMPLE_CAP,
        description="Spending rows kept before aggregating; 0 disables sampling",
    )
    top_recipients: int = Field(default=DEFAULT_TOP_RECIPIENTS)
    improvement_case_limit: int = Field(default=DEFAULT_IMPROVEMENT_CASE_LIMIT)

    workers: int = Field(default=1)
    json_indent: Optional[int] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="RS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("spending_sample_cap")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(0, value)

    @field_validator("top_recipients", "improvement_case_limit", "workers")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)

    @property
    def basic_info_path(self) -> Path:
        return self.input_dir / self.basic_info_file

    @property
    def performance_path(self) -> Path:
        return self.input_dir / self.performance_file

    @property
    def evaluation_path(self) -> Path:
        return self.input_dir / self.evaluation_file

    @property
    def spending_path(self) -> Path:
        return self.input_dir / self.spending_file


@lru_cache(maxsize=1)
def get_settings() -> PipelineSettings:
    return PipelineSettings()
