"""Configuration for filterpipe runs."""

from filterpipe.config.settings import FilterSettings, build_filter_settings, parse_suffixes

__all__ = ["FilterSettings", "build_filter_settings", "parse_suffixes"]
