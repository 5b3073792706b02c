"""Constants used in the project."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class StrategyNames(Enum):
    """Detection strategies run by the aggregator.

    Args:
        Enum (string): Strategy names as reported in analysis results.
    """

    MANIFEST = "nuspec"
    PATTERN_SETS = "pattern_sets"
    ENUMERATION = "framework_enumeration"


class AssetCategory(Enum):
    """Roles a package file can play.

    Args:
        Enum (string): Category tags as reported in scan results.
    """

    RUNTIME = "runtime"
    COMPILE = "compile"
    CONTENT = "content"
    RESOURCE = "resource"
    BUILD = "build"
    BUILD_MULTITARGETING = "build_multitargeting"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "COMPATFINDER_LOG_LEVEL"
    ENV_CONFIG = "COMPATFINDER_CONFIG"
    DEFAULT_CONFIG_PATHS = [
        "compatfinder.yml",
        os.path.join("~", ".config", "compatfinder", "compatfinder.yml"),
    ]

    # Package layout
    EMPTY_FOLDER_MARKER = "_._"
    ASSEMBLY_PREFIXES = ("lib/", "ref/")
    MSBUILD_EXTENSIONS = (".props", ".targets")
    ASSEMBLY_EXTENSIONS = (".dll", ".exe", ".winmd")
    RESOURCE_ASSEMBLY_SUFFIX = ".resources.dll"
    MAX_PACKAGE_ID_LENGTH = 100

    # Analysis tunables
    ALLOW_ENUMERATION = False
    ENUMERATION_MAX_WORKERS = 4
    INCLUDE_SPECIAL_FRAMEWORKS = False
    LOG_LEVEL = "INFO"


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first YAML config found.

    Search order: explicit path, $COMPATFINDER_CONFIG, then the default paths.

    Returns:
        dict: Parsed config, or an empty dict when nothing is found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = []
    if path:
        candidates.append(path)
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    candidates.extend(Constants.DEFAULT_CONFIG_PATHS)

    for candidate in candidates:
        full = os.path.expanduser(candidate)
        if not os.path.isfile(full):
            continue
        try:
            with open(full, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Couldn't read config file %s: %s", full, exc)
            continue
        if isinstance(data, dict):
            return data
        logger.warning("Ignoring config file %s: top level is not a mapping", full)
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply recognised config keys onto Constants.

    Unknown keys are ignored; malformed values are logged and skipped.
    """
    analysis = cfg.get("analysis") if isinstance(cfg, dict) else None
    if isinstance(analysis, dict):
        if "allow_enumeration" in analysis:
            Constants.ALLOW_ENUMERATION = bool(analysis["allow_enumeration"])
        if "include_special_frameworks" in analysis:
            Constants.INCLUDE_SPECIAL_FRAMEWORKS = bool(analysis["include_special_frameworks"])
        if "max_workers" in analysis:
            try:
                workers = int(analysis["max_workers"])
            except (TypeError, ValueError):
                logger.warning("Invalid analysis.max_workers value: %r", analysis["max_workers"])
            else:
                Constants.ENUMERATION_MAX_WORKERS = max(1, workers)

    log_cfg = cfg.get("logging") if isinstance(cfg, dict) else None
    if isinstance(log_cfg, dict) and log_cfg.get("level"):
        Constants.LOG_LEVEL = str(log_cfg["level"]).upper()
