"""
Configuration package for evm-auto-deploy.
"""

from evm_auto_deploy.config.network import (
    BUILTIN_NETWORKS_DIR,
    DEFAULT_NETWORK_TYPE,
    NetworkProfile,
    available_network_types,
    load_network_config,
)

from evm_auto_deploy.config.settings import (
    DeploySettings,
    EnvKeyProvider,
)

__all__ = [
    # Network
    'BUILTIN_NETWORKS_DIR',
    'DEFAULT_NETWORK_TYPE',
    'NetworkProfile',
    'available_network_types',
    'load_network_config',

    # Settings
    'DeploySettings',
    'EnvKeyProvider',
]
