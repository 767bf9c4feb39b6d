import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagesplit.splitting.base import SplitConfig

logger = logging.getLogger(__name__)


class SplittingConfig(BaseModel):
    """Configuration for blank-band splitting."""

    max_height: int = Field(default=2000, gt=0, description="Maximum piece height before the blank search")
    min_height: int = Field(default=1000, gt=0, description="Minimum piece height; no blank row above it is an error")
    margin: int = Field(default=0, ge=0, description="Extra rows appended to the bottom of each piece")
    blank_height: int = Field(default=30, gt=0, description="Rolling-average window in rows")
    blank_var_threshold: float = Field(default=100.0, ge=0.0, description="Smoothed variance below which a row is blank")

    # Horizontal range used for row statistics, in percent of the width.
    # left < right is checked by the splitter, not here.
    blank_left: float = Field(default=0.0, ge=0.0, le=100.0, description="Left edge of the measured range (percent)")
    blank_right: float = Field(default=100.0, ge=0.0, le=100.0, description="Right edge of the measured range (percent)")

    @model_validator(mode="after")
    def check_heights(self) -> "SplittingConfig":
        if self.min_height > self.max_height:
            raise ValueError(
                f"min_height ({self.min_height}) must not exceed max_height ({self.max_height})"
            )
        return self

    def to_split_config(self) -> SplitConfig:
        """Convert to the splitter's configuration."""
        return SplitConfig(
            max_height=self.max_height,
            min_height=self.min_height,
            margin=self.margin,
            window=self.blank_height,
            blank_threshold=self.blank_var_threshold,
            left_fraction=self.blank_left / 100.0,
            right_fraction=self.blank_right / 100.0,
        )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAGESPLIT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Paths
    output_dir: Path = Path("output")

    # Output extension override (None = keep the source extension)
    file_ext: Optional[str] = None

    splitting: SplittingConfig = SplittingConfig()

    def with_overrides(self, **overrides) -> "Settings":
        """
        Return new settings with the given values replaced.

        Keys matching SplittingConfig fields go to the nested splitting
        config; None values are ignored. Both levels are re-validated.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        splitting_fields = SplittingConfig.model_fields.keys()

        splitting_values = self.splitting.model_dump()
        top_values = self.model_dump(exclude={"splitting"})
        for key, value in overrides.items():
            if key in splitting_fields:
                splitting_values[key] = value
            elif key in top_values:
                top_values[key] = value
            else:
                logger.warning(f"[Config] Ignoring unknown setting: {key}")

        return Settings(**top_values, splitting=SplittingConfig(**splitting_values))

    @property
    def output_extension(self) -> Optional[str]:
        """Normalized extension override, without leading dot."""
        if not self.file_ext:
            return None
        return self.file_ext.lower().lstrip(".")


settings = Settings()
