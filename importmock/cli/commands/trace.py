"""
Trace command implementation.

Imports a module with a private interceptor installed and the diagnostic
trace written to stdout. No substitutions are registered, so the import
behaves exactly as it normally would.
"""

import importlib
import logging
import sys

from importmock.cli.utils import load_cli_config, prepend_search_paths
from importmock.core import colors
from importmock.core.interceptor import ImportInterceptor
from importmock.core.registry import SubstitutionRegistry
from importmock.core.resolver import ModuleResolver
from importmock.core.trace import ImportTracer

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the trace command.

    Args:
        args: Parsed command-line arguments (module, no_stack, config, path)

    Returns:
        Exit code (0 for success, 1 if the module fails to import)
    """
    logger.debug(f"Arguments: {args}")
    config = load_cli_config(args.config)
    prepend_search_paths(args.path)

    colors.configure(config.color, sys.stdout)

    tracer = ImportTracer()
    tracer.enable(stack=config.stack and not args.no_stack, stream=sys.stdout)
    interceptor = ImportInterceptor(
        registry=SubstitutionRegistry(), resolver=ModuleResolver(), tracer=tracer
    )

    print(f"tracing: {colors.bold(args.module)}")
    interceptor.install()
    try:
        importlib.import_module(args.module)
    except ImportError as e:
        logger.error(f"Failed to import {args.module}: {e}")
        return 1
    finally:
        interceptor.uninstall()
        tracer.disable()

    return 0
