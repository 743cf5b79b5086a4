"""Utility functions and classes for nproc."""

# ruff: noqa: F401
from .config import load_settings, merge_config_dicts, read_and_merge_config_files
from .system import CpuQuerySource, get_cpu_query_source
