"""
Structured logging for inputguard.

Import directly from sub-modules:
    from inputguard.logging.setup import get_logger, setup_logging
    from inputguard.logging.utilities import log_with_context
    from inputguard.logging.context import set_log_context
"""
