"""gRPC client for a live operator-registry catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import grpc
from grpc_health.v1 import health_pb2, health_pb2_grpc

from depster.config import CatalogClientConfig
from depster.domain.errors import CatalogConnectionError, CatalogLookupError, CatalogQueryError
from depster.domain.ports import BundleIterator

from .schema import (
    GET_BUNDLE_FOR_CHANNEL,
    GET_BUNDLE_THAT_REPLACES,
    GET_PACKAGE,
    LIST_BUNDLES,
    BundleMessage,
    GetBundleInChannelRequest,
    GetPackageRequest,
    GetReplacementRequest,
    ListBundlesRequest,
    PackageMessage,
)
from .translator import to_bundle, to_package

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from depster.domain.model import Bundle, Package
    from depster.domain.ports import CatalogClient

log = getLogger(__name__)


def _query_error(method: str, address: str, exc: grpc.RpcError) -> CatalogQueryError:
    code: grpc.StatusCode | None = None
    details = str(exc)
    if isinstance(exc, grpc.Call):
        code = exc.code()
        details = exc.details() or details
    message = f"{method} on catalog {address} failed: {details}"
    if code == grpc.StatusCode.NOT_FOUND or "not found" in details.lower():
        return CatalogLookupError(message)
    return CatalogQueryError(message)


class GrpcBundleStream:
    """Adapts a server-streaming ``ListBundles`` response to ``recv``."""

    def __init__(self, responses: Iterator[Any], *, address: str) -> None:
        self._responses = responses
        self._address = address

    def recv(self) -> Bundle | None:
        try:
            message = next(self._responses)
        except StopIteration:
            return None
        except grpc.RpcError as exc:
            raise _query_error("ListBundles", self._address, exc) from exc
        return to_bundle(message)


class GrpcCatalogClient:
    """Queries the ``api.Registry`` service of a catalog reachable at ``address``."""

    def __init__(
        self,
        channel: grpc.Channel,
        *,
        address: str,
        config: CatalogClientConfig | None = None,
    ) -> None:
        self._channel = channel
        self._address = address
        self._config = config or CatalogClientConfig()
        self._get_package = channel.unary_unary(
            GET_PACKAGE,
            request_serializer=GetPackageRequest.SerializeToString,
            response_deserializer=PackageMessage.FromString,
        )
        self._get_bundle_for_channel = channel.unary_unary(
            GET_BUNDLE_FOR_CHANNEL,
            request_serializer=GetBundleInChannelRequest.SerializeToString,
            response_deserializer=BundleMessage.FromString,
        )
        self._get_bundle_that_replaces = channel.unary_unary(
            GET_BUNDLE_THAT_REPLACES,
            request_serializer=GetReplacementRequest.SerializeToString,
            response_deserializer=BundleMessage.FromString,
        )
        self._list_bundles = channel.unary_stream(
            LIST_BUNDLES,
            request_serializer=ListBundlesRequest.SerializeToString,
            response_deserializer=BundleMessage.FromString,
        )
        self._health = health_pb2_grpc.HealthStub(channel)

    def get_bundle_in_package_channel(self, package_name: str, channel_name: str) -> Bundle:
        request = GetBundleInChannelRequest(pkgName=package_name, channelName=channel_name)
        return to_bundle(self._call("GetBundleForChannel", self._get_bundle_for_channel, request))

    def get_package(self, package_name: str) -> Package:
        request = GetPackageRequest(name=package_name)
        return to_package(self._call("GetPackage", self._get_package, request))

    def get_replacement_bundle_in_package_channel(
        self, current_name: str, package_name: str, channel_name: str
    ) -> Bundle:
        request = GetReplacementRequest(
            csvName=current_name, pkgName=package_name, channelName=channel_name
        )
        return to_bundle(
            self._call("GetBundleThatReplaces", self._get_bundle_that_replaces, request)
        )

    def health_check(self, reconnect_timeout: float) -> bool:
        try:
            response = self._health.Check(
                health_pb2.HealthCheckRequest(service=""), timeout=reconnect_timeout
            )
        except grpc.RpcError as exc:
            log.debug("Health check against %s failed: %s", self._address, exc)
            return False
        return response.status == health_pb2.HealthCheckResponse.SERVING

    def list_bundles(self) -> BundleIterator:
        try:
            responses = self._list_bundles(
                ListBundlesRequest(), timeout=self._config.request_timeout_seconds
            )
        except grpc.RpcError as exc:
            raise _query_error("ListBundles", self._address, exc) from exc
        return BundleIterator(GrpcBundleStream(responses, address=self._address))

    def close(self) -> None:
        log.debug("Closing catalog connection to %s", self._address)
        self._channel.close()

    def _call(self, method: str, stub: Callable[..., Any], request: Any) -> Any:
        try:
            return stub(request, timeout=self._config.request_timeout_seconds)
        except grpc.RpcError as exc:
            raise _query_error(method, self._address, exc) from exc


def connect_catalog(address: str, *, config: CatalogClientConfig | None = None) -> GrpcCatalogClient:
    """Open a channel to ``address`` and return a client once the catalog is serving."""

    effective = config or CatalogClientConfig()
    if not address:
        raise CatalogConnectionError("error creating registry client: catalog address is empty")

    channel = grpc.insecure_channel(address)
    try:
        grpc.channel_ready_future(channel).result(timeout=effective.connect_timeout_seconds)
    except grpc.FutureTimeoutError as exc:
        channel.close()
        raise CatalogConnectionError(
            f"error creating registry client: catalog {address} not reachable "
            f"within {effective.connect_timeout_seconds}s"
        ) from exc

    client = GrpcCatalogClient(channel, address=address, config=effective)
    if not client.health_check(effective.health_timeout_seconds):
        client.close()
        raise CatalogConnectionError(f"error creating registry client: catalog {address} is not serving")
    log.debug("Connected to catalog at %s", address)
    return client


if TYPE_CHECKING:

    def _client_check(channel: grpc.Channel) -> CatalogClient:
        return GrpcCatalogClient(channel, address="")
