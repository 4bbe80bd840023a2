"""protobones - Example stub generator for protobuf RPC services."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protobones")
except PackageNotFoundError:
    __version__ = "(local)"
