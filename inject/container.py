"""
Container - Inversion of Control container for inject
Maps tokens to lazily constructed singleton services and resolves their
dependencies on demand.
"""

import contextlib
import inspect
import logging
import threading
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .config_factory import ContainerConfig
from .errors import (
    CircularDependencyError,
    DuplicateRegistrationError,
    InvalidDependencyEntryError,
    InvalidDependencyListError,
    InvalidRegistrationError,
    UnknownServiceError,
)

logger = logging.getLogger(__name__)

# Attribute read from a factory when a registration carries no explicit deps
DEPS_ATTRIBUTE = 'deps'


@dataclass
class Registration:
    """A single registration request"""
    token: str
    value: Any
    deps: Optional[Sequence[str]] = None


class ProviderDefinition:
    """Definition of how a service should be created"""

    def __init__(self, token: str, factory: Callable, dependencies: Tuple[str, ...] = ()):
        self.token = token
        self.factory = factory
        self.dependencies = dependencies

    def __repr__(self) -> str:
        return f"ProviderDefinition(token={self.token!r}, dependencies={list(self.dependencies)})"


def annotate(*tokens: str) -> Callable:
    """
    Attach dependency tokens to a factory.

    Usage:
        @annotate('logging', 'RoomStore')
        def make_service(log, store):
            ...
    """
    def decorator(factory: Callable) -> Callable:
        setattr(factory, DEPS_ATTRIBUTE, list(tokens))
        return factory
    return decorator


def _is_token_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


class Container:
    """
    Inversion of Control container.

    Features:
    - Lazy singleton construction
    - Dependency annotation via explicit deps, a factory attribute or an
      inline list ending with the factory
    - Circular dependency detection
    - Thread-safe registry with per-thread resolution stacks

    The lock is held while factories run, so a factory must not wait on
    another thread that calls get() on the same container; that deadlocks.
    """

    def __init__(self, config: Optional[ContainerConfig] = None):
        self.config = config or ContainerConfig()
        self._services: Dict[str, ProviderDefinition] = {}
        self._instances: Dict[str, Any] = {}
        self._lock = threading.RLock() if self.config.thread_safe else contextlib.nullcontext()
        self._local = threading.local()

    @property
    def self_token(self) -> str:
        return self.config.self_token

    @property
    def _creating(self) -> List[str]:
        """Tokens being resolved on the current thread."""
        stack = getattr(self._local, 'stack', None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def register(self, request: Any) -> 'Container':
        """
        Register one service, or a list of services in order.

        Each request is a mapping (or Registration) with `token`, `value` and
        optional `deps`. Requests in a list are committed one by one, so
        those before a failing request stay registered.

        Returns:
            Self for method chaining

        Raises:
            InvalidRegistrationError: If the request is malformed
            InvalidDependencyListError: If deps is not a list of tokens
            InvalidDependencyEntryError: If an inline annotation is malformed
            DuplicateRegistrationError: If the token is already registered
        """
        if isinstance(request, (list, tuple)):
            for item in request:
                self._register_one(item)
        else:
            self._register_one(request)
        return self

    def _register_one(self, request: Any) -> None:
        token, value, deps = self._read_request(request)
        definition = self._build_definition(token, value, deps)

        with self._lock:
            if token == self.self_token or token in self._services:
                raise DuplicateRegistrationError(f"'{token}'", details={'token': token})
            self._services[token] = definition

        logger.debug(f"Registered service: {token} (deps={list(definition.dependencies)})")

    def _read_request(self, request: Any) -> Tuple[str, Any, Any]:
        if isinstance(request, Registration):
            token, value, deps = request.token, request.value, request.deps
        elif isinstance(request, Mapping):
            missing = [key for key in ('token', 'value') if key not in request]
            if missing:
                raise InvalidRegistrationError(f"missing {', '.join(missing)}", details={'token': request.get('token')})
            token, value, deps = request['token'], request['value'], request.get('deps')
        else:
            raise InvalidRegistrationError(f"expected a mapping, got {type(request).__name__}")

        if not isinstance(token, str) or not token:
            raise InvalidRegistrationError(f"token must be a non-empty string, got {token!r}", details={'token': token})

        if not callable(value) and not isinstance(value, (list, tuple)):
            raise InvalidRegistrationError(f"value for '{token}' must be callable or an inline annotation", details={'token': token})

        return token, value, deps

    def _build_definition(self, token: str, value: Any, deps: Any) -> ProviderDefinition:
        """Normalize the three annotation forms into one ProviderDefinition."""
        if deps is not None and not _is_token_list(deps):
            raise InvalidDependencyListError(f"'{token}' declared {deps!r}", details={'token': token, 'dependencies': deps})

        inline_deps = None
        if isinstance(value, (list, tuple)):
            if not value:
                raise InvalidDependencyEntryError(f"'{token}' has an empty annotation", details={'token': token})
            for index, entry in enumerate(value[:-1]):
                if not isinstance(entry, str):
                    raise InvalidDependencyEntryError(
                        f"'{token}' entry {index} is {entry!r}", details={'token': token, 'index': index})
            factory = value[-1]
            if not callable(factory):
                raise InvalidDependencyEntryError(
                    f"'{token}' last entry {factory!r} is not callable", details={'token': token, 'index': len(value) - 1})
            inline_deps = value[:-1]
        else:
            factory = value

        if deps is None:
            attached = inspect.getattr_static(factory, DEPS_ATTRIBUTE, None)
            if attached is not None:
                if not _is_token_list(attached):
                    raise InvalidDependencyListError(
                        f"'{token}' factory attribute '{DEPS_ATTRIBUTE}' is {attached!r}",
                        details={'token': token, 'dependencies': attached})
                deps = attached
            else:
                deps = inline_deps or ()

        return ProviderDefinition(token=token, factory=factory, dependencies=tuple(deps))

    def get(self, token: str) -> Any:
        """
        Get a service instance, creating it if necessary.

        Args:
            token: Service token to retrieve

        Returns:
            Service instance, or the container for the self token

        Raises:
            UnknownServiceError: If the service (or a dependency) is not registered
            CircularDependencyError: If circular dependency detected
        """
        if token == self.self_token:
            return self

        with self._lock:
            return self._resolve(token)

    def _resolve(self, token: str) -> Any:
        if token == self.self_token:
            return self

        if token in self._instances:
            return self._instances[token]

        creating = self._creating

        if token not in self._services:
            details = {'token': token}
            if creating:
                details['required_by'] = creating[-1]
            raise UnknownServiceError(f"'{token}'", details=details)

        if token in creating:
            path = creating + [token]
            raise CircularDependencyError(' -> '.join(path), details={'token': token, 'path': path})

        creating.append(token)
        try:
            definition = self._services[token]
            dependencies = [self._resolve(dep) for dep in definition.dependencies]
            instance = self._construct(definition, dependencies)
            self._instances[token] = instance
        finally:
            creating.pop()

        return instance

    def _construct(self, definition: ProviderDefinition, dependencies: List[Any]) -> Any:
        """
        Invoke a factory with resolved dependencies.

        Classes are instantiated; a plain function's return value is the
        instance, and a function returning None yields a fresh namespace.
        Any other return value, scalars included, is used as the instance
        unchanged.
        """
        logger.debug(f"Creating instance for: {definition.token}")
        instance = definition.factory(*dependencies)

        if instance is None and not inspect.isclass(definition.factory):
            instance = SimpleNamespace()

        return instance

    def has_service(self, token: str) -> bool:
        """Check if a service is registered"""
        return token == self.self_token or token in self._services

    def __contains__(self, token: str) -> bool:
        return self.has_service(token)

    def is_resolved(self, token: str) -> bool:
        """Check if a service instance has been created"""
        return token in self._instances

    def get_service_names(self) -> List[str]:
        """Get list of all registered service tokens"""
        return list(self._services.keys())

    def validate_dependencies(self) -> Dict[str, List[str]]:
        """
        Validate all service dependencies are registered.

        Returns:
            Dictionary mapping service tokens to lists of missing dependencies
        """
        issues = {}

        for token, definition in self._services.items():
            missing_deps = [dep for dep in definition.dependencies if not self.has_service(dep)]
            if missing_deps:
                issues[token] = missing_deps

        return issues

    def get_dependency_graph(self) -> Dict[str, List[str]]:
        """Get the dependency graph for debugging"""
        return {token: list(definition.dependencies) for token, definition in self._services.items()}

    def __repr__(self) -> str:
        return f"Container(services={len(self._services)}, instances={len(self._instances)})"


Inject = Container
