import base64
import binascii

import grpc
from cryptography import x509
from pymacaroons import Macaroon
from pymacaroons.serializers import BinarySerializer

from lnd_example.constants import MACAROON_METADATA_KEY
from lnd_example.errors import CredentialLoadError
from lnd_example.logger import log


def read_file(path: str, label: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise CredentialLoadError(
            f'could not read {label} at {path}', path=path, cause=e
        ) from e


class TransportCredential(object):
    """
    Pinned TLS certificate of the remote node.

    LND serves a self-signed certificate, so the certificate itself is used
    as the only trusted root for the handshake.
    """
    path: str
    pem: bytes
    certificate: x509.Certificate

    def __init__(self, path: str, pem: bytes, certificate: x509.Certificate):
        self.path = path
        self.pem = pem
        self.certificate = certificate

    @classmethod
    def from_file(cls, path: str) -> 'TransportCredential':
        pem = read_file(path, 'TLS cert')
        try:
            certificate = x509.load_pem_x509_certificate(pem)
        except ValueError as e:
            raise CredentialLoadError(
                f'could not parse TLS cert at {path}', path=path, cause=e
            ) from e
        log.debug('loaded TLS cert',
                  path=path,
                  subject=certificate.subject.rfc4514_string())
        return cls(path=path, pem=pem, certificate=certificate)

    def channel_credentials(self) -> grpc.ChannelCredentials:
        return grpc.ssl_channel_credentials(root_certificates=self.pem)


class AuthorizationToken(object):
    """Anything that can produce per-call authorization metadata."""

    def metadata(self):
        raise NotImplementedError


class MacaroonToken(AuthorizationToken):
    path: str
    raw: bytes
    macaroon: Macaroon

    def __init__(self, path: str, raw: bytes, macaroon: Macaroon):
        self.path = path
        self.raw = raw
        self.macaroon = macaroon

    @classmethod
    def from_file(cls, path: str) -> 'MacaroonToken':
        raw = read_file(path, 'macaroon')
        if not raw:
            raise CredentialLoadError(
                f'macaroon file at {path} is empty', path=path
            )
        # pymacaroons expects the binary format wrapped in base64
        encoded = base64.urlsafe_b64encode(raw).rstrip(b'=').decode('ascii')
        # noinspection PyBroadException
        try:
            macaroon = Macaroon.deserialize(encoded,
                                            serializer=BinarySerializer())
        except Exception as e:
            # pymacaroons raises a mix of exception types on malformed input
            raise CredentialLoadError(
                f'could not read macaroon bytes at {path} into struct',
                path=path,
                cause=e
            ) from e
        if not macaroon.identifier or not macaroon.signature:
            raise CredentialLoadError(
                f'macaroon at {path} has no identifier or signature',
                path=path
            )
        log.debug('loaded macaroon',
                  path=path,
                  location=macaroon.location,
                  caveats=len(macaroon.caveats))
        return cls(path=path, raw=raw, macaroon=macaroon)

    def metadata(self):
        return (
            (MACAROON_METADATA_KEY, binascii.hexlify(self.raw).decode('ascii')),
        )


class TokenMetadataPlugin(grpc.AuthMetadataPlugin):
    """Attaches the authorization token to every outbound call."""

    def __init__(self, token: AuthorizationToken):
        self.token = token

    def __call__(self, context, callback):
        callback(self.token.metadata(), None)


def composite_credentials(transport: TransportCredential,
                          token: AuthorizationToken) -> grpc.ChannelCredentials:
    call_credentials = grpc.metadata_call_credentials(
        TokenMetadataPlugin(token),
        name=MACAROON_METADATA_KEY
    )
    return grpc.composite_channel_credentials(
        transport.channel_credentials(),
        call_credentials
    )
