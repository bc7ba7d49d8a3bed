import grpc

from lnd_example.deadline import Deadline
from lnd_example.errors import CallError
from lnd_example.protos.lightning import (
    GET_INFO_METHOD,
    GetInfoRequest,
    GetInfoResponse
)


class RpcClient(object):
    """The slice of lnrpc.Lightning this client talks to."""
    channel: grpc.Channel

    def __init__(self, channel: grpc.Channel):
        self.channel = channel
        self._get_info = channel.unary_unary(
            GET_INFO_METHOD,
            request_serializer=GetInfoRequest.SerializeToString,
            response_deserializer=GetInfoResponse.FromString
        )

    def get_info(self, deadline: Deadline) -> GetInfoResponse:
        if deadline.expired:
            raise CallError(
                'could not get info',
                method=GET_INFO_METHOD,
                cause=TimeoutError('context deadline exceeded'),
                code=grpc.StatusCode.DEADLINE_EXCEEDED,
                deadline_exceeded=True
            )
        try:
            return self._get_info(GetInfoRequest(),
                                  timeout=deadline.remaining())
        except grpc.RpcError as e:
            raise CallError(
                'could not get info',
                method=GET_INFO_METHOD,
                cause=e,
                code=e.code(),
                details=e.details(),
                deadline_exceeded=e.code() is grpc.StatusCode.DEADLINE_EXCEEDED
            ) from e
