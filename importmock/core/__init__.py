"""
Core functionality for importmock.

This package contains the import substitution machinery: specifier
resolution, the substitution registry, the import interceptor and the
orchestrator behind ``mock_load``.
"""

from .exceptions import (
    ImportMockError,
    ConfigurationError,
    ResolutionError,
    StaleMockError,
    UnexpectedArgumentsError,
)

from .config import (
    ImportMockConfig,
    load_config,
    clear_config_cache,
)

from .resolver import (
    ModuleResolver,
    package_from_globals,
    requester_of,
)

from .registry import (
    SubstitutionEntry,
    SubstitutionRegistry,
    get_registry,
)

from .trace import ImportTracer

from .interceptor import (
    ImportInterceptor,
    ModuleView,
    get_interceptor,
)

from .orchestrator import (
    MockOrchestrator,
    get_orchestrator,
    mock_load,
)

__all__ = [
    # Exceptions
    "ImportMockError",
    "ConfigurationError",
    "ResolutionError",
    "StaleMockError",
    "UnexpectedArgumentsError",
    # Configuration
    "ImportMockConfig",
    "load_config",
    "clear_config_cache",
    # Resolution
    "ModuleResolver",
    "package_from_globals",
    "requester_of",
    # Registry
    "SubstitutionEntry",
    "SubstitutionRegistry",
    "get_registry",
    # Interception
    "ImportTracer",
    "ImportInterceptor",
    "ModuleView",
    "get_interceptor",
    # Orchestration
    "MockOrchestrator",
    "get_orchestrator",
    "mock_load",
]
