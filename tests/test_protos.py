from google.protobuf.json_format import MessageToDict

from lnd_example.protos.lightning import (
    GET_INFO_METHOD,
    GetInfoRequest,
    GetInfoResponse
)
from tests.integration.mock_lnd_server import get_info_response


def test_method_path():
    assert GET_INFO_METHOD == '/lnrpc.Lightning/GetInfo'


def test_request_is_empty():
    assert GetInfoRequest().SerializeToString() == b''


def test_wire_field_numbers():
    # alias = 2, synced_to_chain = 9
    response = GetInfoResponse.FromString(b'\x12\x03lnd\x48\x01')
    assert response.alias == 'lnd'
    assert response.synced_to_chain


def test_message_to_dict():
    data = MessageToDict(get_info_response(),
                         preserving_proto_field_name=True)
    assert data['alias'] == 'mock-lnd'
    assert data['num_active_channels'] == 3
    assert data['chains'] == [{'chain': 'bitcoin', 'network': 'regtest'}]
    assert data['features']['9'] == {'name': 'tlv-onion', 'is_known': True}
