"""
Subset of LND's lightning.proto needed for the GetInfo probe.

Field names and numbers follow lnrpc/lightning.proto. Only these messages are
declared, in a private descriptor pool, so they can't clash with generated
lnrpc modules that may also be imported in the same process.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

STRING = FieldDescriptorProto.TYPE_STRING
UINT32 = FieldDescriptorProto.TYPE_UINT32
INT64 = FieldDescriptorProto.TYPE_INT64
BOOL = FieldDescriptorProto.TYPE_BOOL
MESSAGE = FieldDescriptorProto.TYPE_MESSAGE

OPTIONAL = FieldDescriptorProto.LABEL_OPTIONAL
REPEATED = FieldDescriptorProto.LABEL_REPEATED

PACKAGE = 'lnrpc'


def add_field(message: descriptor_pb2.DescriptorProto,
              name: str,
              number: int,
              field_type: int,
              label: int = OPTIONAL,
              type_name: str = None):
    field = message.field.add(name=name,
                              number=number,
                              type=field_type,
                              label=label)
    if type_name is not None:
        field.type_name = type_name
    return field


def build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name='lnd_example/lightning.proto',
        package=PACKAGE,
        syntax='proto3'
    )

    file_proto.message_type.add(name='GetInfoRequest')

    chain = file_proto.message_type.add(name='Chain')
    add_field(chain, 'chain', 1, STRING)
    add_field(chain, 'network', 2, STRING)

    feature = file_proto.message_type.add(name='Feature')
    add_field(feature, 'name', 2, STRING)
    add_field(feature, 'is_required', 3, BOOL)
    add_field(feature, 'is_known', 4, BOOL)

    response = file_proto.message_type.add(name='GetInfoResponse')
    add_field(response, 'version', 14, STRING)
    add_field(response, 'commit_hash', 20, STRING)
    add_field(response, 'identity_pubkey', 1, STRING)
    add_field(response, 'alias', 2, STRING)
    add_field(response, 'color', 17, STRING)
    add_field(response, 'num_pending_channels', 3, UINT32)
    add_field(response, 'num_active_channels', 4, UINT32)
    add_field(response, 'num_inactive_channels', 15, UINT32)
    add_field(response, 'num_peers', 5, UINT32)
    add_field(response, 'block_height', 6, UINT32)
    add_field(response, 'block_hash', 8, STRING)
    add_field(response, 'best_header_timestamp', 13, INT64)
    add_field(response, 'synced_to_chain', 9, BOOL)
    add_field(response, 'synced_to_graph', 18, BOOL)
    add_field(response, 'testnet', 10, BOOL)
    add_field(response, 'chains', 16, MESSAGE, REPEATED, '.lnrpc.Chain')
    add_field(response, 'uris', 12, STRING, REPEATED)
    add_field(response, 'features', 19, MESSAGE, REPEATED,
              '.lnrpc.GetInfoResponse.FeaturesEntry')
    add_field(response, 'require_htlc_interceptor', 21, BOOL)
    add_field(response, 'store_final_htlc_resolutions', 22, BOOL)

    # map<uint32, Feature> features = 19;
    features_entry = response.nested_type.add(name='FeaturesEntry')
    features_entry.options.map_entry = True
    add_field(features_entry, 'key', 1, UINT32)
    add_field(features_entry, 'value', 2, MESSAGE, type_name='.lnrpc.Feature')

    service = file_proto.service.add(name='Lightning')
    service.method.add(name='GetInfo',
                       input_type='.lnrpc.GetInfoRequest',
                       output_type='.lnrpc.GetInfoResponse')
    return file_proto


pool = descriptor_pool.DescriptorPool()
pool.AddSerializedFile(build_file().SerializeToString())


def message_class(name: str):
    descriptor = pool.FindMessageTypeByName(f'{PACKAGE}.{name}')
    return message_factory.GetMessageClass(descriptor)


def method_path(service_name: str, method_name: str) -> str:
    service = pool.FindServiceByName(f'{PACKAGE}.{service_name}')
    method = service.methods_by_name[method_name]
    return f'/{service.full_name}/{method.name}'


GetInfoRequest = message_class('GetInfoRequest')
GetInfoResponse = message_class('GetInfoResponse')
Chain = message_class('Chain')
Feature = message_class('Feature')

GET_INFO_METHOD = method_path('Lightning', 'GetInfo')
