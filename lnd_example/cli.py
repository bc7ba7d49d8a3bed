import json
import os
import sys

from google.protobuf.json_format import MessageToDict

from lnd_example.bootstrap import SecureSessionBootstrapper
from lnd_example.constants import (
    DEFAULT_MACAROON_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_TLS_CERT_PATH
)
from lnd_example.deadline import Deadline
from lnd_example.errors import BootstrapError
from lnd_example.logger import configure_logging, log


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description='Connect to LND over gRPC and print GetInfo'
    )

    parser.add_argument(
        '--tls-cert',
        type=str,
        help='Path to TLS certificate',
        default=os.environ.get('LND_TLS_CERT', DEFAULT_TLS_CERT_PATH)
    )

    parser.add_argument(
        '--macaroon',
        type=str,
        help='Path to macaroon',
        default=os.environ.get('LND_MACAROON', DEFAULT_MACAROON_PATH)
    )

    server_default = os.environ.get('LND_SERVER')
    parser.add_argument(
        '--server',
        type=str,
        help='Remote server location, host:port',
        default=server_default,
        required=server_default is None
    )

    parser.add_argument(
        '--grpclog',
        action='store_true',
        help='Enable gRPC logging'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        help='Seconds to wait for the dial and the GetInfo call together',
        default=DEFAULT_TIMEOUT
    )

    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Display additional information for debugging'
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, grpclog=args.grpclog)

    log.info('lnd-example: starting')

    # One budget for the whole run so nothing can hang forever
    deadline = Deadline(args.timeout)

    bootstrapper = SecureSessionBootstrapper(
        server=args.server,
        tls_cert_path=args.tls_cert,
        macaroon_path=args.macaroon,
        timeout=args.timeout,
        grpclog=args.grpclog
    )
    try:
        info = bootstrapper.run(deadline)
    except BootstrapError as e:
        log.error(str(e), step=e.step)
        sys.exit(1)

    info_data = MessageToDict(info, preserving_proto_field_name=True)
    log.info('LND info',
             alias=info.alias,
             identity_pubkey=info.identity_pubkey,
             duration=round(deadline.elapsed(), 3))
    print(json.dumps(info_data, indent=2, sort_keys=True))


if __name__ == '__main__':
    main()
