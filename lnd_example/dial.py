import queue

import grpc

from lnd_example.constants import DEFAULT_RPC_PORT, GRPC_OPTIONS
from lnd_example.deadline import Deadline
from lnd_example.errors import ConnectionError

ChannelConnectivity = grpc.ChannelConnectivity

# Not served by LND, so a call that does reach the node is answered
# UNIMPLEMENTED without being dispatched
CONNECTION_ERROR_METHOD = '/lnd_example.Dial/LastConnectionError'


def normalize_address(address: str, default_port: int = DEFAULT_RPC_PORT) -> str:
    """
    Turn a host, host:port or IPv6 literal into a gRPC target.

    gRPC would otherwise fall back to port 443 when none is given. Targets
    with a scheme (dns:///, unix:, ...) are passed through untouched.
    """
    address = address.strip()
    if '://' in address or address.startswith('unix:'):
        return address
    if address.startswith('['):
        if ']:' in address:
            return address
        return f'{address}:{default_port}'
    colons = address.count(':')
    if colons == 0:
        return f'{address}:{default_port}'
    if colons == 1:
        return address
    # Bare IPv6 literal
    return f'[{address}]:{default_port}'


def last_connection_error(channel: grpc.Channel, deadline: Deadline):
    """
    Fetch the reason for the channel's last failed connection attempt.

    The connectivity API only reports states, so a fail-fast call is made:
    while the channel is in TRANSIENT_FAILURE it is rejected before leaving
    the client, with the transport error as its details. Returns None when
    the channel has connected in the meantime.
    """
    call = channel.unary_unary(CONNECTION_ERROR_METHOD)
    try:
        call(b'', timeout=deadline.remaining(), wait_for_ready=False)
    except grpc.RpcError as e:
        if e.code() is grpc.StatusCode.UNIMPLEMENTED:
            return None
        return e
    return None


def wait_for_ready(channel: grpc.Channel,
                   target: str,
                   deadline: Deadline,
                   fail_on_non_temp_dial_error: bool = True,
                   transport_log=None):
    states = queue.Queue()
    on_state = states.put
    channel.subscribe(on_state, try_to_connect=True)
    try:
        while True:
            try:
                state = states.get(timeout=deadline.remaining())
            except queue.Empty:
                raise ConnectionError(
                    f'could not dial to LND at {target} before the deadline',
                    address=target,
                    cause=TimeoutError(
                        f'context deadline exceeded after {deadline.timeout}s'
                    ),
                    deadline_exceeded=True
                )

            if transport_log is not None:
                transport_log.info('grpc connectivity',
                                   target=target,
                                   state=state.name,
                                   elapsed=round(deadline.elapsed(), 3))

            if state is ChannelConnectivity.READY:
                return

            if state is ChannelConnectivity.SHUTDOWN:
                raise ConnectionError(
                    f'channel to {target} was shut down while dialing',
                    address=target
                )

            if state is ChannelConnectivity.TRANSIENT_FAILURE:
                if not fail_on_non_temp_dial_error:
                    if transport_log is not None:
                        transport_log.warning('grpc dial failed, retrying',
                                              target=target)
                    continue
                cause = last_connection_error(channel, deadline)
                if cause is None:
                    # Connected in the meantime; READY is queued next
                    continue
                raise ConnectionError(
                    f'could not dial to LND at {target}',
                    address=target,
                    cause=cause,
                    deadline_exceeded=(
                        cause.code() is grpc.StatusCode.DEADLINE_EXCEEDED
                    )
                )
    finally:
        channel.unsubscribe(on_state)


def dial(address: str,
         credentials: grpc.ChannelCredentials,
         deadline: Deadline,
         options=None,
         block: bool = True,
         fail_on_non_temp_dial_error: bool = True,
         transport_log=None) -> grpc.Channel:
    """
    Open a secure channel to ``address`` under ``deadline``.

    With ``block`` the call only returns once the channel is READY. With
    ``fail_on_non_temp_dial_error`` the first failed connection attempt is
    raised instead of being retried with backoff until the deadline. The
    channel is closed on every failure path.
    """
    if not address or not address.strip():
        raise ConnectionError('no LND server address given', address=address)
    target = normalize_address(address)
    channel = grpc.secure_channel(
        target,
        credentials,
        options=GRPC_OPTIONS if options is None else options
    )
    if not block:
        return channel
    try:
        wait_for_ready(channel,
                       target,
                       deadline,
                       fail_on_non_temp_dial_error=fail_on_non_temp_dial_error,
                       transport_log=transport_log)
    except BaseException:
        channel.close()
        raise
    return channel
