"""Default configuration values for Ambitype."""

from .config import AmbitypeConfig


def create_default_config(**overrides) -> AmbitypeConfig:
    """Create a default configuration with optional overrides.

    Args:
        **overrides: Keyword arguments to override default values

    Returns:
        AmbitypeConfig with defaults and overrides applied

    Example:
        config = create_default_config(
            corpus_dir="public",
            initial_buffer_chars=8000
        )
    """
    return AmbitypeConfig(**overrides)
