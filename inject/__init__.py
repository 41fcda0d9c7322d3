"""
inject - a minimal inversion of control container.
"""

from .config_factory import ConfigError, ConfigurationFactory, ContainerConfig, configure_logging
from .container import Container, Inject, ProviderDefinition, Registration, annotate
from .errors import (
    ERROR,
    CircularDependencyError,
    DuplicateRegistrationError,
    ErrorCode,
    InjectError,
    InvalidDependencyEntryError,
    InvalidDependencyListError,
    InvalidRegistrationError,
    UnknownServiceError,
)

__all__ = [
    'Container',
    'Inject',
    'ProviderDefinition',
    'Registration',
    'annotate',
    'ContainerConfig',
    'ConfigurationFactory',
    'ConfigError',
    'configure_logging',
    'ERROR',
    'ErrorCode',
    'InjectError',
    'InvalidRegistrationError',
    'InvalidDependencyListError',
    'InvalidDependencyEntryError',
    'DuplicateRegistrationError',
    'CircularDependencyError',
    'UnknownServiceError',
]
