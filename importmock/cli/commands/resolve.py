"""
Resolve command implementation.

Shows the canonical module a specifier maps to, the way ``mock_load``
resolves targets and replacement keys.
"""

import logging

from importmock.cli.utils import prepend_search_paths
from importmock.core.exceptions import ResolutionError
from importmock.core.resolver import ModuleResolver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments (specifier, package, path)

    Returns:
        Exit code (0 for success, 1 if the specifier doesn't resolve)
    """
    logger.debug(f"Arguments: {args}")
    prepend_search_paths(args.path)

    resolver = ModuleResolver()
    try:
        name = resolver.resolve(args.specifier, package=args.package)
    except ResolutionError as e:
        logger.error(str(e))
        return 1

    print(name)
    print(f"  origin:  {resolver.origin_of(name) or '(no file)'}")
    print(f"  package: {resolver.package_of(name) or '(top-level)'}")
    return 0
