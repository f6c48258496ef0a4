"""Protobuf messages of the operator-registry ``api.Registry`` gRPC service.

Only the messages the catalog client exchanges are described. The descriptor is
assembled at import time, so no generated ``_pb2`` module is needed; field names
and numbers match ``registry.proto`` so the wire format is identical.
"""

from __future__ import annotations

from typing import Any, Final

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

SERVICE: Final[str] = "api.Registry"
GET_PACKAGE: Final[str] = f"/{SERVICE}/GetPackage"
GET_BUNDLE_FOR_CHANNEL: Final[str] = f"/{SERVICE}/GetBundleForChannel"
GET_BUNDLE_THAT_REPLACES: Final[str] = f"/{SERVICE}/GetBundleThatReplaces"
LIST_BUNDLES: Final[str] = f"/{SERVICE}/ListBundles"

_STRING = "string"

# message name -> (field name, field number, field type, repeated)
_MESSAGES: Final[dict[str, tuple[tuple[str, int, str, bool], ...]]] = {
    "Channel": (
        ("name", 1, _STRING, False),
        ("csvName", 2, _STRING, False),
    ),
    "Package": (
        ("name", 1, _STRING, False),
        ("channels", 2, "Channel", True),
        ("defaultChannelName", 3, _STRING, False),
    ),
    "GroupVersionKind": (
        ("group", 1, _STRING, False),
        ("version", 2, _STRING, False),
        ("kind", 3, _STRING, False),
        ("plural", 4, _STRING, False),
    ),
    "Dependency": (
        ("type", 1, _STRING, False),
        ("value", 2, _STRING, False),
    ),
    "Property": (
        ("type", 1, _STRING, False),
        ("value", 2, _STRING, False),
    ),
    "Bundle": (
        ("csvName", 1, _STRING, False),
        ("packageName", 2, _STRING, False),
        ("channelName", 3, _STRING, False),
        ("csvJson", 4, _STRING, False),
        ("object", 5, _STRING, True),
        ("bundlePath", 6, _STRING, False),
        ("providedApis", 7, "GroupVersionKind", True),
        ("requiredApis", 8, "GroupVersionKind", True),
        ("version", 9, _STRING, False),
        ("skipRange", 10, _STRING, False),
        ("dependencies", 11, "Dependency", True),
        ("properties", 12, "Property", True),
        ("replaces", 13, _STRING, False),
        ("skips", 14, _STRING, True),
    ),
    "GetPackageRequest": (("name", 1, _STRING, False),),
    "GetBundleInChannelRequest": (
        ("pkgName", 1, _STRING, False),
        ("channelName", 2, _STRING, False),
    ),
    "GetReplacementRequest": (
        ("csvName", 1, _STRING, False),
        ("pkgName", 2, _STRING, False),
        ("channelName", 3, _STRING, False),
    ),
    "ListBundlesRequest": (),
}


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    field_type = descriptor_pb2.FieldDescriptorProto
    proto = descriptor_pb2.FileDescriptorProto(
        name="depster/registry.proto", package="api", syntax="proto3"
    )
    for message_name, fields in _MESSAGES.items():
        message = proto.message_type.add(name=message_name)
        for name, number, type_name, repeated in fields:
            field = message.field.add(
                name=name,
                number=number,
                label=field_type.LABEL_REPEATED if repeated else field_type.LABEL_OPTIONAL,
            )
            if type_name == _STRING:
                field.type = field_type.TYPE_STRING
            else:
                field.type = field_type.TYPE_MESSAGE
                field.type_name = f".api.{type_name}"
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_file_descriptor().SerializeToString())


def _message_class(name: str) -> Any:
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"api.{name}"))


ChannelMessage = _message_class("Channel")
PackageMessage = _message_class("Package")
GroupVersionKindMessage = _message_class("GroupVersionKind")
DependencyMessage = _message_class("Dependency")
PropertyMessage = _message_class("Property")
BundleMessage = _message_class("Bundle")
GetPackageRequest = _message_class("GetPackageRequest")
GetBundleInChannelRequest = _message_class("GetBundleInChannelRequest")
GetReplacementRequest = _message_class("GetReplacementRequest")
ListBundlesRequest = _message_class("ListBundlesRequest")
