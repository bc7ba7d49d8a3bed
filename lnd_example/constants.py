DEFAULT_TLS_CERT_PATH = './tls.cert'
DEFAULT_MACAROON_PATH = './admin.macaroon'

DEFAULT_RPC_PORT = 10009

# Seconds
DEFAULT_TIMEOUT = 10

MACAROON_METADATA_KEY = 'macaroon'

GRPC_OPTIONS = [
    ('grpc.max_receive_message_length', 33554432),
    ('grpc.max_send_message_length', 33554432),
]
