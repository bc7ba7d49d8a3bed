import logging
import sys

import structlog

log = structlog.get_logger()


def configure_logging(verbose: bool = False, grpclog: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(
                key_order=['event', 'level']
            )
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    # The grpc library only logs process-wide, so this has to happen
    # before any channel is created. Its info output is very noisy.
    if grpclog:
        grpc_logger = logging.getLogger('grpc')
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.WARNING)
        grpc_logger.addHandler(handler)
        grpc_logger.setLevel(logging.WARNING)
        grpc_logger.propagate = False
