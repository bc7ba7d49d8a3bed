import grpc

from lnd_example.constants import (
    DEFAULT_MACAROON_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_TLS_CERT_PATH
)
from lnd_example.credentials import (
    AuthorizationToken,
    MacaroonToken,
    TransportCredential,
    composite_credentials
)
from lnd_example.deadline import Deadline
from lnd_example.dial import dial
from lnd_example.logger import log
from lnd_example.protos.lightning import GetInfoResponse
from lnd_example.rpc_client import RpcClient


class Session(object):
    """
    A channel to LND with the TLS cert and the macaroon applied.

    Only built once both credentials have loaded. Closing the session
    closes the channel; use it as a context manager so that happens on
    every exit path.
    """
    address: str
    channel: grpc.Channel
    transport: TransportCredential
    token: AuthorizationToken
    rpc: RpcClient

    def __init__(self,
                 address: str,
                 channel: grpc.Channel,
                 transport: TransportCredential,
                 token: AuthorizationToken):
        self.address = address
        self.channel = channel
        self.transport = transport
        self.token = token
        self.rpc = RpcClient(channel)
        self.closed = False

    def get_info(self, deadline: Deadline) -> GetInfoResponse:
        return self.rpc.get_info(deadline)

    def close(self):
        if not self.closed:
            self.channel.close()
            self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class SecureSessionBootstrapper(object):
    """
    Loads the TLS cert and the macaroon, dials LND and probes it with
    GetInfo, all under one deadline.

    Any failure is raised as a BootstrapError subclass; nothing is retried.
    Transport diagnostics go to ``logger`` when ``grpclog`` is set, instead
    of reconfiguring logging for the whole process.
    """

    def __init__(self,
                 server: str,
                 tls_cert_path: str = DEFAULT_TLS_CERT_PATH,
                 macaroon_path: str = DEFAULT_MACAROON_PATH,
                 timeout: float = DEFAULT_TIMEOUT,
                 grpclog: bool = False,
                 logger=None,
                 block: bool = True,
                 fail_on_non_temp_dial_error: bool = True,
                 grpc_options=None):
        self.server = server
        self.tls_cert_path = tls_cert_path
        self.macaroon_path = macaroon_path
        self.timeout = timeout
        self.grpclog = grpclog
        self.block = block
        self.fail_on_non_temp_dial_error = fail_on_non_temp_dial_error
        self.grpc_options = grpc_options
        self.log = (logger or log).bind(server=server)

    def load_credentials(self):
        transport = TransportCredential.from_file(self.tls_cert_path)
        token = MacaroonToken.from_file(self.macaroon_path)
        return transport, token

    def connect(self, deadline: Deadline = None) -> Session:
        if deadline is None:
            deadline = Deadline(self.timeout)
        transport, token = self.load_credentials()

        channel = dial(
            self.server,
            composite_credentials(transport, token),
            deadline,
            options=self.grpc_options,
            block=self.block,
            fail_on_non_temp_dial_error=self.fail_on_non_temp_dial_error,
            transport_log=self.log if self.grpclog else None
        )
        self.log.info('dialed to LND',
                      duration=round(deadline.elapsed(), 3),
                      block=self.block)
        return Session(address=self.server,
                       channel=channel,
                       transport=transport,
                       token=token)

    def run(self, deadline: Deadline = None) -> GetInfoResponse:
        if deadline is None:
            deadline = Deadline(self.timeout)
        with self.connect(deadline) as session:
            return session.get_info(deadline)
