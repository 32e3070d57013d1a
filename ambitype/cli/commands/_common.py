"""Shared helpers for CLI commands."""

from ambitype.config import AmbitypeConfig, create_default_config


def config_from_args(args) -> AmbitypeConfig:
    """Build a config from the corpus source options."""
    overrides = {}
    if getattr(args, "corpus_dir", None):
        overrides["corpus_dir"] = args.corpus_dir
    if getattr(args, "base_url", None):
        overrides["corpus_base_url"] = args.base_url
    return create_default_config(**overrides)
