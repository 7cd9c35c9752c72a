"""Finding installed plugins."""

from __future__ import annotations

import os

from mikroscli import fs
from mikroscli.client import FeaturePlugin, ServicePlugin
from mikroscli.settings import Settings


def list_executable_files(directory: str) -> list[str]:
    """Return the sorted names of executable files inside directory."""
    return sorted(
        entry
        for entry in os.listdir(directory)
        if fs.is_executable(os.path.join(directory, entry))
    )


def _service_plugins(cfg: Settings) -> list[ServicePlugin]:
    base = cfg.paths.plugins.services
    if not fs.find_path(base):
        return []
    return [ServicePlugin(base, name) for name in list_executable_files(base)]


def _feature_plugins(cfg: Settings) -> list[FeaturePlugin]:
    base = cfg.paths.plugins.features
    if not fs.find_path(base):
        return []
    return [FeaturePlugin(base, name) for name in list_executable_files(base)]


def get_new_service_kinds(cfg: Settings) -> list[str]:
    """Return the service kinds provided by the installed service plugins."""
    return [plugin.get_kind() for plugin in _service_plugins(cfg)]


def get_features_ui_names(cfg: Settings) -> list[str]:
    """Return the UI names of the installed feature plugins."""
    return [plugin.get_ui_name() for plugin in _feature_plugins(cfg)]


def get_service_plugin(cfg: Settings, kind: str) -> ServicePlugin | None:
    """Return the service plugin providing kind, or None."""
    for plugin in _service_plugins(cfg):
        if plugin.get_kind() == kind:
            return plugin
    return None


def get_feature_plugin(cfg: Settings, name: str) -> FeaturePlugin | None:
    """Return the feature plugin whose UI name is name, or None."""
    for plugin in _feature_plugins(cfg):
        if plugin.get_ui_name() == name:
            return plugin
    return None