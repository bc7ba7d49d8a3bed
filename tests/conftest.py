import base64
import socket

import pytest
from pymacaroons import Macaroon
from pymacaroons.macaroon import MACAROON_V2

from lnd_example.constants import GRPC_OPTIONS
from tests.integration.mock_lnd_server import CA_PEM, MockLightning, start_server

# The test certificate is issued for localhost, the server binds 127.0.0.1
TLS_OPTIONS = GRPC_OPTIONS + [('grpc.ssl_target_name_override', 'localhost')]


def macaroon_bytes(key: str = 'root key', identifier: str = '0') -> bytes:
    macaroon = Macaroon(location='lnd',
                        identifier=identifier,
                        key=key,
                        version=MACAROON_V2)
    macaroon.add_first_party_caveat('lnd-custom admin')
    serialized = macaroon.serialize()
    if isinstance(serialized, bytes):
        serialized = serialized.decode('ascii')
    return base64.urlsafe_b64decode(serialized + '=' * (-len(serialized) % 4))


@pytest.fixture
def tls_cert_path(tmp_path):
    path = tmp_path / 'tls.cert'
    path.write_bytes(CA_PEM)
    return str(path)


@pytest.fixture
def admin_macaroon():
    return macaroon_bytes()


@pytest.fixture
def macaroon_path(tmp_path, admin_macaroon):
    path = tmp_path / 'admin.macaroon'
    path.write_bytes(admin_macaroon)
    return str(path)


@pytest.fixture
def mock_lnd(admin_macaroon):
    handler = MockLightning(expected_macaroon=admin_macaroon.hex())
    server, port = start_server(handler)
    handler.address = f'127.0.0.1:{port}'
    yield handler
    server.stop(None)


@pytest.fixture
def closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def silent_port():
    """Accepts TCP connections but never answers the TLS handshake."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    sock.listen(16)
    yield sock.getsockname()[1]
    sock.close()
