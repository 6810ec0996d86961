"""
RoadGen Configuration Module

Centralized configuration management for the road generator.
Loads settings from environment variables with sensible defaults.

Usage:
    from config import config
    size = config.DEFAULT_SIZE
    out_dir = config.OUTPUT_DIR
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from roadgen.constants import (
    DEFAULT_ALTITUDE_VARIATION,
    DEFAULT_COUNT,
    DEFAULT_LINEARITY,
    DEFAULT_SIZE,
)

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: {name}={raw!r} is not an integer, using {default}.")
        return default


def _bool_env(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """
    Configuration class for the road generator.

    Attributes are loaded from environment variables with fallback defaults.
    """

    # =============================================================================
    # Generation Defaults
    # =============================================================================

    @property
    def DEFAULT_SIZE(self) -> int:
        """Lattice side and road length"""
        return _int_env('ROADGEN_SIZE', DEFAULT_SIZE)

    @property
    def DEFAULT_LINEARITY(self) -> int:
        """Weight of the straight-ahead option"""
        return _int_env('ROADGEN_LINEARITY', DEFAULT_LINEARITY)

    @property
    def DEFAULT_ALTITUDE_VARIATION(self) -> int:
        """Weight of each climb option"""
        return _int_env('ROADGEN_ALTITUDE_VARIATION', DEFAULT_ALTITUDE_VARIATION)

    @property
    def DEFAULT_COUNT(self) -> int:
        """Number of roads written per batch run"""
        return _int_env('ROADGEN_COUNT', DEFAULT_COUNT)

    @property
    def MAX_ATTEMPTS(self) -> int:
        """Attempts per road before giving up (0 = retry forever)"""
        return _int_env('ROADGEN_MAX_ATTEMPTS', 0)

    # =============================================================================
    # File Paths
    # =============================================================================

    @property
    def PROJECT_ROOT(self) -> Path:
        """Project root directory"""
        return Path(__file__).parent

    @property
    def OUTPUT_DIR(self) -> Path:
        """Default directory for generated road JSON files"""
        output_dir = Path(os.getenv('OUTPUT_DIR', 'out'))
        if not output_dir.is_absolute():
            output_dir = self.PROJECT_ROOT / output_dir
        return output_dir

    # =============================================================================
    # Debug/Development
    # =============================================================================

    @property
    def DEBUG(self) -> bool:
        """Enable debug mode"""
        return _bool_env('DEBUG', 'False')

    @property
    def LOG_LEVEL(self) -> str:
        """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"""
        level = os.getenv('LOG_LEVEL', 'INFO').upper()
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        return level if level in valid_levels else 'INFO'

    @property
    def VERBOSE(self) -> bool:
        """Print retries and backtracking during generation"""
        return _bool_env('VERBOSE', 'False') or self.LOG_LEVEL == 'DEBUG'

    # =============================================================================
    # Helper Methods
    # =============================================================================

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of warnings/errors.

        Returns:
            List of warning/error messages (empty if all OK)
        """
        issues = []

        if self.DEFAULT_SIZE < 1:
            issues.append("Default size must be a positive integer")
        if self.DEFAULT_LINEARITY < 1 or self.DEFAULT_ALTITUDE_VARIATION < 1:
            issues.append("Linearity and altitude variation must be positive integers")
        if self.DEFAULT_COUNT < 1:
            issues.append("Default count must be a positive integer")
        if self.MAX_ATTEMPTS < 0:
            issues.append("Max attempts cannot be negative")
        if self.OUTPUT_DIR.exists() and not self.OUTPUT_DIR.is_dir():
            issues.append(f"Output path is not a directory: {self.OUTPUT_DIR}")

        return issues

    def get_summary(self) -> str:
        """
        Get human-readable configuration summary.

        Returns:
            Formatted configuration summary string
        """
        lines = [
            "RoadGen Configuration:",
            f"  Project Root: {self.PROJECT_ROOT}",
            f"  Output Dir: {self.OUTPUT_DIR}",
            "",
            "Defaults:",
            f"  Size: {self.DEFAULT_SIZE}",
            f"  Linearity: {self.DEFAULT_LINEARITY}",
            f"  Altitude variation: {self.DEFAULT_ALTITUDE_VARIATION}",
            f"  Count: {self.DEFAULT_COUNT}",
            f"  Max attempts: {self.MAX_ATTEMPTS or 'unlimited'}",
            "",
            "Debug:",
            f"  Debug mode: {self.DEBUG}",
            f"  Log level: {self.LOG_LEVEL}",
            f"  Verbose: {self.VERBOSE}",
        ]
        return "\n".join(lines)


# Global config instance
config = Config()


def check_config():
    """
    Check configuration and print warnings.
    Call this at application startup.
    """
    issues = config.validate()
    if issues:
        print("Configuration Warnings:")
        for issue in issues:
            print(f"   - {issue}")
        print()
    return issues


if __name__ == "__main__":
    # Allow running as script to check configuration
    print(config.get_summary())
    print()

    issues = config.validate()
    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"   - {issue}")
    else:
        print("Configuration valid!")
